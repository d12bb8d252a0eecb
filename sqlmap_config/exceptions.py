"""
Custom exceptions for the SQL map configuration system.

This module defines specific exception types for the different error conditions
that can occur while a configuration document is assembled into a Configuration.
Section-level errors propagate unchanged until the XMLConfigBuilder boundary, where
they are wrapped in a single ConfigurationParseError.
"""


class SqlMapConfigError(Exception):
    """Base exception for all configuration assembly errors."""

    def __init__(self, message: str, resource: str = None):
        """
        Initialize configuration error.

        Args:
            message: Error description
            resource: Optional resource (file, URL or section) the error relates to
        """
        super().__init__(message)
        self.resource = resource


class TypeResolutionError(SqlMapConfigError):
    """Exception raised when a type name cannot be resolved to a loadable type."""

    def __init__(self, message: str, type_name: str = None):
        super().__init__(message)
        self.type_name = type_name


class UnknownAliasError(TypeResolutionError):
    """Exception raised when an alias is neither registered nor an importable dotted path."""

    def __init__(self, message: str, alias: str = None):
        super().__init__(message, type_name=alias)
        self.alias = alias


class InstantiationError(SqlMapConfigError):
    """Exception raised when a resolved type cannot be built with its zero-argument constructor."""

    def __init__(self, message: str, type_name: str = None):
        super().__init__(message)
        self.type_name = type_name


class AliasRegistrationError(SqlMapConfigError):
    """Exception raised when a type alias cannot be registered."""

    def __init__(self, message: str, alias: str = None):
        super().__init__(message)
        self.alias = alias


class UnknownSettingError(SqlMapConfigError):
    """Exception raised when the settings section names a key the Configuration does not expose."""

    def __init__(self, message: str, key: str = None):
        super().__init__(message)
        self.key = key


class SettingValueError(SqlMapConfigError):
    """Exception raised when a known setting carries a value that cannot be converted."""

    def __init__(self, message: str, key: str = None, value: str = None):
        super().__init__(message)
        self.key = key
        self.value = value


class TypeHandlerRegistrationError(SqlMapConfigError):
    """Exception raised when a type handler cannot be registered."""
    pass


class MapperElementError(SqlMapConfigError):
    """Exception raised when a mapper element specifies none or more than one source."""
    pass


class MapperRegistrationError(SqlMapConfigError):
    """Exception raised when a mapper type is registered twice or is not a mapper type."""
    pass


class BindingError(SqlMapConfigError):
    """Exception raised when a mapper method cannot be bound to a mapped statement."""
    pass


class NoEnvironmentSpecifiedError(SqlMapConfigError):
    """Exception raised when neither the caller nor the document names a target environment."""
    pass


class MissingEnvironmentIdError(SqlMapConfigError):
    """Exception raised when a declared environment has no id attribute."""
    pass


class EnvironmentDeclarationError(SqlMapConfigError):
    """Exception raised when an environment lacks its transaction manager or data source."""
    pass


class PropertiesSourceError(SqlMapConfigError):
    """Exception raised when a properties section names both a resource and a URL."""
    pass


class ResourceLoadError(SqlMapConfigError):
    """Exception raised when a resource or URL cannot be read."""
    pass


class DocumentParsingError(SqlMapConfigError):
    """Exception raised when a configuration or mapper document cannot be parsed."""

    def __init__(self, message: str, xml_content: str = None, resource: str = None):
        """
        Initialize document parsing error.

        Args:
            message: Error description
            xml_content: Optional document content that failed to parse (truncated for logging)
            resource: Optional resource the document came from
        """
        super().__init__(message, resource)
        # Store truncated content for debugging (first 500 chars)
        self.xml_content = xml_content[:500] + "..." if xml_content and len(xml_content) > 500 else xml_content


class DataSourceError(SqlMapConfigError):
    """Exception raised when a data source is misconfigured or cannot connect."""
    pass


class TransactionError(SqlMapConfigError):
    """Exception raised when a transaction cannot be opened, committed or rolled back."""
    pass


class AlreadyParsedError(SqlMapConfigError):
    """Exception raised when an XMLConfigBuilder is asked to parse a second time."""
    pass


class ConfigurationParseError(SqlMapConfigError):
    """Umbrella exception raised by XMLConfigBuilder.parse() for any section failure."""

    def __init__(self, message: str, section: str = None, cause: Exception = None):
        """
        Initialize configuration parse error.

        Args:
            message: Error description
            section: Label of the section that was being parsed when the failure occurred
            cause: Original exception raised by the section
        """
        super().__init__(message, section)
        self.section = section
        self.cause = cause
