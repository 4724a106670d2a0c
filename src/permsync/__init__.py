"""Permission set sync - keeps permission set declarations in step with their stores."""

__version__ = "0.1.0"
