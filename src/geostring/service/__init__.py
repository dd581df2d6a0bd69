"""HTTP service exposing the coordinate parser."""
