"""
Benchmark suite for odjson parsing and serialization.

Compares odjson against other JSON libraries:
- Python standard library json
- orjson (C-optimized)
- ujson (ultra-fast JSON)
"""
