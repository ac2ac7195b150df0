"""Implementation modules for bowyer; import public names from ``bowyer``."""
