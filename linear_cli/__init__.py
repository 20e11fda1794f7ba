"""linear-cli: command-line client and analytics for the Linear issue tracker."""

__version__ = "0.1.0"
