"""
POM Version Manager

A Python tool for aligning dependency and plugin versions across a multi-module
Maven POM tree against one or more Bill-of-Materials (BOM) POMs.
"""

__version__ = "0.1.0"
__author__ = "POM Version Manager Team"

# Make version easily importable
def get_version():
    """Get the current version of the POM Version Manager."""
    return __version__


def main(argv=None):
    """Run the command line interface."""
    from .cli import main as cli_main
    return cli_main(argv)


__all__ = ['get_version', 'main']
