"""Asset Normalizer - converts heterogeneous assets into uniform vertical clips."""

from pathlib import Path
from typing import Any, Sequence

from faceless_video.core.config import Settings
from faceless_video.core.exceptions import NormalizationError, PipelineError
from faceless_video.models.schemas import MediaAsset, MediaKind, NormalizedClip
from faceless_video.services.transcoder import TranscodingEngine
from faceless_video.utils.error_handler import format_error_message, get_fallback_suggestion


class AssetNormalizer:
    """Fills and crops every asset onto the fixed output canvas."""

    def __init__(self, settings: Settings, logger: Any, engine: TranscodingEngine):
        """
        Initialize the asset normalizer.

        Args:
            settings: Application settings
            logger: Logger instance
            engine: Transcoding engine performing scale and crop
        """
        self.settings = settings
        self.logger = logger
        self.engine = engine

    def normalize(self, asset: MediaAsset, output_path: Path) -> NormalizedClip:
        """
        Normalize a single asset.

        Stills are held for image_hold_seconds; videos lose their audio stream.

        Raises:
            TranscodeError: If the engine cannot process the asset
        """
        if asset.kind == MediaKind.IMAGE:
            self.logger.info(f"Converting image to clip: {asset.path.name}")
        else:
            self.logger.info(f"Processing video: {asset.path.name}")

        self.engine.scale_crop(asset.path, output_path, asset.kind)
        return NormalizedClip(source=asset, path=output_path)

    def normalize_all(
        self, assets: Sequence[MediaAsset], workspace: Path
    ) -> tuple[list[NormalizedClip], list[MediaAsset]]:
        """
        Normalize assets one at a time, in input order.

        A failing asset is logged and skipped.

        Args:
            assets: Input assets
            workspace: Directory that receives processed-<i>.mp4 files

        Returns:
            Tuple of (normalized clips, skipped assets)

        Raises:
            NormalizationError: If no asset could be normalized
        """
        clips: list[NormalizedClip] = []
        skipped: list[MediaAsset] = []

        for index, asset in enumerate(assets):
            output_path = workspace / f"processed-{index}.mp4"
            try:
                clips.append(self.normalize(asset, output_path))
            except PipelineError as e:
                self.logger.warning(
                    format_error_message(
                        "Normalizing asset",
                        e,
                        context={"asset": asset.path.name, "index": index},
                        suggestion=get_fallback_suggestion("Asset Normalization", e),
                    )
                )
                output_path.unlink(missing_ok=True)
                skipped.append(asset)

        if not clips:
            raise NormalizationError(f"No assets were successfully processed ({len(assets)} attempted)")

        self.logger.info(f"Normalized {len(clips)}/{len(assets)} asset(s)")
        return clips, skipped
