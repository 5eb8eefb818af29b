"""Cart pricing, order lifecycle and receipt handling for the LuloCart marketplace."""

__version__ = "0.1.0"
