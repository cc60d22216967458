"""
htopsettings - persistent configuration for an htop-style process monitor.
"""

__version__ = "0.9.0"
