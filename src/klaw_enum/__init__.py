"""klaw-enum: Tagged unions with runtime-checked matching for Python 3.13+.

Declare a tagged union, build values, and dispatch on them. Result and Option
are tagged unions too, with the usual adapter methods on top, and the Try
helpers turn raising code into Results.

Flat imports (preferred):
    from klaw_enum import enum, VariantFactory, Variant
    from klaw_enum import Result, Ok, Err, Option, Some, Nothing
    from klaw_enum import Try, TryInto, try_into

Submodule imports (for organization):
    from klaw_enum.factory import VariantFactory
    from klaw_enum.result import Ok, Err, RESULT
    from klaw_enum.option import Some, Nothing, OPTION
    from klaw_enum.bridge import try_sync, try_async
"""

# Configuration
from klaw_enum._config import EnumConfig, get_config, init
from klaw_enum._logging import configure_logging

# Exception bridge
from klaw_enum.bridge import (
    Try,
    TryInto,
    try_async,
    try_into,
    try_into_async,
    try_sync,
)

# Errors
from klaw_enum.errors import (
    EnumError,
    MissingHandlerError,
    PayloadError,
    ReservedTagError,
    SchemaError,
    UnknownVariantError,
    UnwrapError,
    WireFormatError,
)

# Core
from klaw_enum.factory import VariantFactory, enum
from klaw_enum.option import (
    OPTION,
    Nothing,
    NothingType,
    Option,
    OptionFactory,
    Some,
    from_optional,
)
from klaw_enum.result import (
    RESULT,
    Err,
    Ok,
    Result,
    ResultFactory,
    collect,
)
from klaw_enum.schema import UNIT, VariantSchema, WireVariant
from klaw_enum.variant import Variant

__all__ = [
    'OPTION',
    'RESULT',
    'UNIT',
    # Configuration
    'EnumConfig',
    # Errors
    'EnumError',
    'Err',
    'MissingHandlerError',
    'Nothing',
    'NothingType',
    'Ok',
    'Option',
    'OptionFactory',
    'PayloadError',
    'ReservedTagError',
    'Result',
    'ResultFactory',
    'SchemaError',
    'Some',
    # Bridge
    'Try',
    'TryInto',
    'UnknownVariantError',
    'UnwrapError',
    # Core
    'Variant',
    'VariantFactory',
    'VariantSchema',
    'WireFormatError',
    'WireVariant',
    'collect',
    'configure_logging',
    'enum',
    'from_optional',
    'get_config',
    'init',
    'try_async',
    'try_into',
    'try_into_async',
    'try_sync',
]
