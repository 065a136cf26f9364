"""Window arithmetic and fill orders for paged panels."""
