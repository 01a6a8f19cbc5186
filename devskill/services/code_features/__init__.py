"""
Privacy-safe static feature extraction for code snippets.
"""

from .extractor import EXTRACTION_VERSION, CodeFeatures, FeatureExtractor

__all__ = ["EXTRACTION_VERSION", "CodeFeatures", "FeatureExtractor"]
