"""
devsweep - A utility to reclaim disk space on a developer workstation

This tool reports and removes caches, logs and temporary files left behind by
the OS and by developer tools such as Docker, VSCode, Homebrew, npm and Xcode,
or hands the job to each tool's own cleanup command.
"""

__version__ = "0.1.0"
