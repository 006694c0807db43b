"""ns-modernizer - report and rewrite deprecated NaviServer calls in Tcl scripts."""

__version__ = "1.0.0"
