# ffigen - Julia ccall descriptor generator for SA-MP GDK natives
__version__ = "0.1.0"
