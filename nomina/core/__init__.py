"""Core models and errors shared by every Nomina layer."""
