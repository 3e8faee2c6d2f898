"""HTTP host for shapedrag shape sessions."""
