"""Clock keeping, MAX7219 LED matrix frames and a compact lenient JSON toolkit."""

__version__ = "0.1.0"