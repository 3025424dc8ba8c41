"""kawabuild - compile Kawa Scheme sources into JVM class files."""

__version__ = "0.1.0"
