"""DayZ Dev Manager: build, configure, launch and stop a local DayZ server + client."""

__version__ = "1.0.0"
