"""Application layer: analysis service façade and caller-side polling."""
