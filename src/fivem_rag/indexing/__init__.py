from .pipeline import IndexingPipeline

__all__ = ["IndexingPipeline"]
