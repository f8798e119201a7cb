"""
Graph-based connection recommender for startups, mentors and investors.
"""
from .config import Config
from .pipeline import RecommendationPipeline

__version__ = "0.1.0"

__all__ = ["Config", "RecommendationPipeline", "__version__"]
