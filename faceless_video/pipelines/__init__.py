"""Pipeline orchestrators for the Faceless Video Factory."""

from faceless_video.pipelines.create_short import ShortVideoPipeline, create_short, main

__all__ = ["ShortVideoPipeline", "create_short", "main"]
