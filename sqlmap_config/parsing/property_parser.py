"""
Placeholder substitution for ${name} tokens in document attributes and text.
"""

import re
from typing import Dict, Optional

ENABLE_DEFAULT_VALUE_KEY = "sqlmap_config.parsing.enable-default-value"
DEFAULT_VALUE_SEPARATOR_KEY = "sqlmap_config.parsing.default-value-separator"
DEFAULT_SEPARATOR = ":"

_PLACEHOLDER = re.compile(r'\$\{([^}]*)\}')


def parse(text: Optional[str], variables: Optional[Dict[str, str]]) -> Optional[str]:
    """
    Replace ${name} placeholders in text with values from variables.

    Unknown placeholders are left untouched. When the variable
    "sqlmap_config.parsing.enable-default-value" is "true", a placeholder of the form
    ${name:default} falls back to default for unknown names.

    Args:
        text: Text that may contain placeholders
        variables: Substitution variables (may be None)

    Returns:
        Text with known placeholders replaced
    """
    if text is None or '${' not in text:
        return text

    variables = variables or {}
    enable_default = str(variables.get(ENABLE_DEFAULT_VALUE_KEY, 'false')).lower() == 'true'
    separator = variables.get(DEFAULT_VALUE_SEPARATOR_KEY, DEFAULT_SEPARATOR)

    def _replace(match):
        content = match.group(1)
        key, default = content, None
        if enable_default and separator in content:
            key, default = content.split(separator, 1)
        if key in variables:
            return str(variables[key])
        if default is not None:
            return default
        return match.group(0)

    return _PLACEHOLDER.sub(_replace, text)
