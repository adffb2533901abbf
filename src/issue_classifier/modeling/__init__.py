"""
Modeling layer for training, persistence and inference.

Provides the trainer registry, the label-key wrapper, model persistence
and the single-record prediction engine.
"""
