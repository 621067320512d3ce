from .create_symmetry_pattern import (
    CreateSymmetryPattern,
    OutputSettings,
    PixelCorners,
    command_from_dict,
    command_from_json,
    command_from_yaml,
    load_command,
    output_settings_from_dict,
    output_settings_from_json,
    output_settings_from_yaml,
)

__all__ = [
    # Pattern commands
    'CreateSymmetryPattern',
    'PixelCorners',
    'command_from_dict',
    'command_from_json',
    'command_from_yaml',
    'load_command',
    # Output size
    'OutputSettings',
    'output_settings_from_dict',
    'output_settings_from_json',
    'output_settings_from_yaml',
]
