# Filename: __init__.py
# Author: Rich Lewis @RichLewis007
# Description: Worker components package for batch jobs. Exports the worker that trashes
#              several paths in one run.

__all__ = ["trash_worker"]
