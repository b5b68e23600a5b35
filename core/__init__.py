"""Order cleaning core: normalization, deduplication and table I/O."""
