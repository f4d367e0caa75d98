"""bagpack - inventory of globally installed brew, npm and pip packages."""

__version__ = "0.1.0"
