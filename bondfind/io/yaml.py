import logging

from bondfind.utils.mixins import YAMLFileMixin

logger = logging.getLogger(__name__)


class YAMLFile(YAMLFileMixin):
    """
    A class for reading YAML files, such as bond detection settings.
    """

    def __init__(self, filename):
        """
        Initialize YAMLFile with a filename.

        Args:
            filename (str): Path to the YAML file to be processed.
        """
        self.filename = filename

    def __repr__(self):
        return f"{self.__class__.__name__}<{self.basename}>"
