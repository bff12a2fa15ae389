"""Report renderers — human (rich), JSON, and raw lines."""
