"""DiffServ packet classification with strict priority and deficit round robin queues."""

__version__ = "0.1.0"