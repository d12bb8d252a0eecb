"""Sample application used by configuration documents in the tests."""
