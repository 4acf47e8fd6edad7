"""
Application Modules.

- remind/: Note store, notification scheduling, configuration and logging
"""
