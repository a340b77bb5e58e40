"""
Custom exception hierarchy for MacroDeck.

## Exception Hierarchy

```
MacroDeckError (base)
├── PluginError
│   ├── PluginDiscoveryError
│   │   ├── PluginLoadError
│   │   └── PluginInstantiationError
│   ├── PluginDirectoryMissingError
│   └── PluginExecutionError
├── BindingError
│   ├── KeyIndexOutOfRangeError
│   └── BindingConfigurationError
├── DeviceError
│   └── DeviceNotFoundError
└── ConfigurationError
    ├── ConfigFileInvalidError
    └── ConfigValidationError
```

All custom exceptions inherit from `MacroDeckError`, which provides:

- `user_message`: Human-friendly message for display to users
- `technical_message`: Detailed message for logging
- `recoverable`: Whether the error can be recovered from
- `recovery_hint`: Optional suggestion for how to fix the issue

Plugin discovery and execution errors are not raised across the plugin
boundary. The registry and dispatcher capture them as values and log them.

See `macrodeck.exceptions.handlers` for utilities to handle these exceptions.
"""

from .base import MacroDeckError
from .bindings import BindingConfigurationError, BindingError, KeyIndexOutOfRangeError
from .config import ConfigFileInvalidError, ConfigurationError, ConfigValidationError
from .device import DeviceError, DeviceNotFoundError
from .handlers import (
    ErrorContext,
    format_error_for_display,
    wrap_device_error,
    wrap_pydantic_error,
)
from .plugins import (
    PluginDirectoryMissingError,
    PluginDiscoveryError,
    PluginError,
    PluginExecutionError,
    PluginInstantiationError,
    PluginLoadError,
)

__all__ = [
    # Bindings
    "BindingConfigurationError",
    "BindingError",
    "KeyIndexOutOfRangeError",
    # Config
    "ConfigFileInvalidError",
    "ConfigValidationError",
    "ConfigurationError",
    # Device
    "DeviceError",
    "DeviceNotFoundError",
    # Handlers
    "ErrorContext",
    "format_error_for_display",
    "wrap_device_error",
    "wrap_pydantic_error",
    # Base
    "MacroDeckError",
    # Plugins
    "PluginDirectoryMissingError",
    "PluginDiscoveryError",
    "PluginError",
    "PluginExecutionError",
    "PluginInstantiationError",
    "PluginLoadError",
]
