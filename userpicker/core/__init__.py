"""Picker-side plumbing: records, debouncing, per-instance session state."""
