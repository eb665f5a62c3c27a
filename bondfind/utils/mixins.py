"""
Mixin classes for file handling.

Key mixin classes:
- FileMixin: Basic file path properties and content reading
- YAMLFileMixin: YAML file parsing
"""

import os
from functools import cached_property


class FileMixin:
    """
    Mixin class for files that can be opened and read.

    Subclasses set a `filename` attribute.
    """

    @property
    def filepath(self):
        """
        Get the absolute path of the file.

        Returns:
            str: Absolute file path.
        """
        return os.path.abspath(self.filename)

    @property
    def base_filename_with_extension(self):
        return os.path.split(self.filepath)[1]

    @property
    def basename(self):
        """
        Get the filename without extension.

        Returns:
            str: Base filename without extension.
        """
        return self.base_filename_with_extension.split(".")[0]

    @cached_property
    def content_lines_string(self):
        """
        Read and cache file contents as a single string.

        Returns:
            str: Complete file contents as a single string.
        """
        with open(self.filepath, "r") as f:
            return f.read()


class YAMLFileMixin(FileMixin):
    """
    Mixin class for YAML file handling and parsing.
    """

    @cached_property
    def yaml_contents_dict(self):
        """
        Parse YAML file contents into a Python object.

        Uses `yaml.safe_load` to read the YAML root (typically a mapping).
        The return type depends on the file contents: dict (common), list,
        scalar, or None for empty files.

        Returns:
            Any: Parsed YAML root object.
        """
        import yaml

        return yaml.safe_load(self.content_lines_string)
