"""Range resolution, windowing, fetch and search core."""
