"""Building blocks for an IRC XDCC download client: settings, files, output,
hashing, arguments, config file, mIRC colours and command dispatch."""

__version__ = "1.1.0"