"""Short video pipeline orchestrator - narration + assets → captioned, mixed vertical video."""

import argparse
import shutil
import sys
import uuid
from datetime import datetime
from pathlib import Path
from typing import Any, Optional, Sequence

from faceless_video.core.config import Settings, settings as default_settings
from faceless_video.core.exceptions import InputValidationError, PipelineError
from faceless_video.core.logging_config import get_logger, setup_logging
from faceless_video.models.schemas import MediaAsset, NarrationTrack, PipelineRun, ShortRequest
from faceless_video.services.asset_normalizer import AssetNormalizer
from faceless_video.services.audio_mixer import AudioMixer
from faceless_video.services.media_prober import MediaProber
from faceless_video.services.music_resolver import MusicResolver
from faceless_video.services.narration_synthesizer import NarrationSynthesizer
from faceless_video.services.overlay_scheduler import OverlayScheduler
from faceless_video.services.script_parser import parse_viral_script
from faceless_video.services.timeline_composer import TimelineComposer
from faceless_video.services.transcoder import FFmpegEngine, TranscodingEngine
from faceless_video.services.tts_client import TTSClient
from faceless_video.utils.error_handler import format_error_message, get_fallback_suggestion
from faceless_video.utils.io_utils import create_workspace, run_timestamp, slugify
from faceless_video.utils.text_utils import split_sentences


# Only the silent fallback tracks can fail in the narration and music stages
STAGE_SERVICES = {
    "narration": "Transcoding",
    "narration probe": "Transcoding",
    "music": "Transcoding",
    "normalize": "Asset Normalization",
    "timeline": "Transcoding",
    "overlay": "Transcoding",
    "mix": "Transcoding",
    "publish": "Publishing",
}


def suggestion_for_stage(stage: str, error: Exception) -> Optional[str]:
    """Pick the recovery hint matching the stage that failed."""
    service = STAGE_SERVICES.get(stage)
    if service is None:
        return None
    return get_fallback_suggestion(service, error)


class ShortVideoPipeline:
    """
    Runs the assembly stages strictly in order inside a scoped workspace.

    Stages: synthesize narration → probe its duration → resolve music →
    normalize assets → compose timeline → burn captions → mix audio →
    write side-files. The workspace is removed on every exit path.
    """

    def __init__(
        self,
        settings: Settings,
        logger: Any,
        engine: Optional[TranscodingEngine] = None,
        tts_client: Optional[TTSClient] = None,
    ):
        """
        Initialize the pipeline and its stage services.

        Args:
            settings: Application settings
            logger: Logger instance
            engine: Transcoding engine (defaults to FFmpegEngine)
            tts_client: Speech client (defaults to one built from settings)
        """
        self.settings = settings
        self.logger = logger
        self.engine = engine or FFmpegEngine(settings, logger)

        self.prober = MediaProber(settings, logger, self.engine)
        self.narration_synthesizer = NarrationSynthesizer(settings, logger, self.engine, tts_client)
        self.music_resolver = MusicResolver(settings, logger, self.engine)
        self.asset_normalizer = AssetNormalizer(settings, logger, self.engine)
        self.timeline_composer = TimelineComposer(settings, logger, self.prober)
        self.overlay_scheduler = OverlayScheduler(settings, logger, self.engine)
        self.audio_mixer = AudioMixer(settings, logger, self.engine)

    def validate(self, request: ShortRequest) -> list[MediaAsset]:
        """
        Reject requests that cannot succeed.

        Raises:
            InputValidationError: Empty script, no assets, or a missing asset file
        """
        if not request.script or not request.script.strip():
            raise InputValidationError("Script cannot be empty")
        if not request.asset_paths:
            raise InputValidationError("At least one asset path is required")

        for asset_path in request.asset_paths:
            if not Path(asset_path).is_file():
                raise InputValidationError(f"Asset file not found: {asset_path}")

        return [MediaAsset.from_path(Path(p)) for p in request.asset_paths]

    def run(self, request: ShortRequest) -> PipelineRun:
        """
        Create one short video.

        Args:
            request: Script, side-file texts, asset paths and output location

        Returns:
            The completed PipelineRun with final artifact paths

        Raises:
            PipelineError: On any fatal stage failure (after workspace cleanup)
        """
        assets = self.validate(request)

        started_at = datetime.now()
        run = PipelineRun(
            run_id=f"run_{uuid.uuid4().hex[:12]}",
            niche=slugify(request.niche) or "short",
            timestamp=run_timestamp(started_at),
            started_at=started_at,
            output_dir=Path(request.output_dir),
        )
        log = self.logger.bind(run_id=run.run_id, niche=run.niche)
        log.info(f"Creating short video: {len(assets)} asset(s), {len(request.script)} script characters")

        workspace = create_workspace(run.output_dir, run.timestamp)
        run.workspace = workspace
        stage = "narration"

        try:
            log.info("Step 1: Generating Text-to-Speech audio...")
            narration_path = workspace / "tts-narration.mp3"
            synthesized, chunk_count = self.narration_synthesizer.synthesize(request.script, narration_path)

            stage = "narration probe"
            duration = self.prober.get_duration(narration_path)
            narration = NarrationTrack(
                path=narration_path, duration=duration, synthesized=synthesized, chunk_count=chunk_count
            )
            run.narration_duration = duration
            log.info(f"TTS duration: {duration:.2f} seconds")

            stage = "music"
            log.info("Step 2: Getting background music...")
            music = self.music_resolver.resolve(workspace)

            stage = "normalize"
            log.info("Step 3: Processing video assets...")
            clips, skipped = self.asset_normalizer.normalize_all(assets, workspace)
            run.skipped_assets = [asset.path for asset in skipped]

            stage = "timeline"
            log.info("Step 4: Concatenating videos...")
            composed = self.timeline_composer.compose(clips, duration, workspace)

            stage = "overlay"
            log.info("Step 5: Adding text overlays...")
            captioned = self.overlay_scheduler.apply(
                composed, duration, split_sentences(request.script), workspace / "video-with-text.mp4"
            )

            stage = "mix"
            log.info("Step 6: Mixing audio tracks...")
            staged_video = workspace / f"{run.artifact_stem}.mp4"
            self.audio_mixer.mix(captioned, narration, music, staged_video)

            stage = "publish"
            log.info("Step 7: Saving video, caption and hashtags...")
            self._publish(run, staged_video, request)

        except Exception as e:
            log.error(
                format_error_message(
                    "Creating short video",
                    e,
                    context={"stage": stage, "run_id": run.run_id},
                    suggestion=suggestion_for_stage(stage, e),
                )
            )
            raise

        finally:
            log.info("Step 8: Cleaning up...")
            shutil.rmtree(workspace, ignore_errors=True)
            if workspace.exists():
                log.warning(f"Temporary workspace could not be fully removed: {workspace}")

        log.info(f"Video created successfully: {run.video_path}")
        return run

    def _publish(self, run: PipelineRun, staged_video: Path, request: ShortRequest) -> None:
        """
        Move the finished artifacts into the output directory.

        Side-files are written inside the workspace first and the video is moved
        last. If any move fails, everything already moved is removed again.
        """
        workspace = staged_video.parent
        output_dir = run.output_dir
        output_dir.mkdir(parents=True, exist_ok=True)

        staged_caption = workspace / f"{run.artifact_stem}_caption.txt"
        staged_hashtags = workspace / f"{run.artifact_stem}_hashtags.txt"
        staged_caption.write_text(request.caption, encoding="utf-8")
        staged_hashtags.write_text(request.hashtags, encoding="utf-8")

        video_path = output_dir / staged_video.name
        caption_path = output_dir / staged_caption.name
        hashtags_path = output_dir / staged_hashtags.name

        published: list[Path] = []
        try:
            for source, destination in (
                (staged_caption, caption_path),
                (staged_hashtags, hashtags_path),
                (staged_video, video_path),
            ):
                shutil.move(str(source), str(destination))
                published.append(destination)
        except OSError:
            for path in published:
                path.unlink(missing_ok=True)
            raise

        run.video_path = video_path
        run.caption_path = caption_path
        run.hashtags_path = hashtags_path


def create_short(
    script: str,
    caption: str,
    hashtags: str,
    asset_paths: Sequence[Path],
    output_dir: Path,
    niche: str = "short",
    settings: Optional[Settings] = None,
    logger: Any = None,
    engine: Optional[TranscodingEngine] = None,
) -> Path:
    """
    Create a short video and return the path of the final file.

    Args:
        script: Narration text
        caption: Caption side-file text
        hashtags: Hashtags side-file text
        asset_paths: Ordered local media files
        output_dir: Permanent output directory
        niche: Artifact file prefix
        settings: Application settings (defaults to the global instance)
        logger: Logger instance
        engine: Transcoding engine (defaults to FFmpegEngine)

    Returns:
        Path to the final video
    """
    settings = settings or default_settings
    logger = logger or get_logger(__name__)
    pipeline = ShortVideoPipeline(settings, logger, engine=engine)
    request = ShortRequest(
        script=script,
        caption=caption,
        hashtags=hashtags,
        asset_paths=[Path(p) for p in asset_paths],
        output_dir=Path(output_dir),
        niche=niche,
    )
    return pipeline.run(request).video_path


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entrypoint: assemble one short video from a script and local assets."""
    parser = argparse.ArgumentParser(
        description="Faceless Video Factory - assemble a vertical short from a script and media assets",
    )
    parser.add_argument(
        "--script-file",
        type=str,
        default=None,
        help="Text file with SCRIPT:/CAPTION:/HASHTAGS: sections",
    )
    parser.add_argument("--script", type=str, default=None, help="Narration text (instead of --script-file)")
    parser.add_argument("--caption", type=str, default=None, help="Caption text (overrides the script file)")
    parser.add_argument("--hashtags", type=str, default=None, help="Hashtags text (overrides the script file)")
    parser.add_argument(
        "--asset",
        dest="assets",
        action="append",
        default=[],
        help="Media file (.mp4, .mov, .avi, .jpg, .jpeg, .png, .webp); repeat for several",
    )
    parser.add_argument(
        "--output-dir",
        type=str,
        default=default_settings.output_dir,
        help=f"Output directory for videos (default: {default_settings.output_dir})",
    )
    parser.add_argument("--niche", type=str, default="short", help="Niche name used in file names (default: short)")
    parser.add_argument("--log-level", type=str, default=None, help="Override LOG_LEVEL")

    args = parser.parse_args(argv)

    if not args.script_file and not args.script:
        parser.error("Either --script-file or --script must be provided")

    setup_logging(
        log_level=args.log_level or default_settings.log_level,
        log_file=Path(default_settings.log_file) if default_settings.log_file else None,
    )
    logger = get_logger(__name__, niche=args.niche)

    logger.info("=" * 60)
    logger.info(f"{default_settings.app_name} - Create Short")
    logger.info("=" * 60)

    if args.script_file:
        parsed = parse_viral_script(Path(args.script_file).read_text(encoding="utf-8"))
    else:
        parsed = parse_viral_script(f"SCRIPT:\n{args.script}")

    pipeline = ShortVideoPipeline(default_settings, logger)
    if not pipeline.engine.is_available():
        logger.error("FFmpeg not found. Please install FFmpeg or set FFMPEG_BINARY.")
        return 1

    request = ShortRequest(
        script=parsed.script,
        caption=args.caption if args.caption is not None else parsed.caption,
        hashtags=args.hashtags if args.hashtags is not None else parsed.hashtags,
        asset_paths=[Path(p) for p in args.assets],
        output_dir=Path(args.output_dir),
        niche=args.niche,
    )

    try:
        run = pipeline.run(request)
    except PipelineError as e:
        logger.error(f"Short video creation failed: {e}")
        return 1
    except Exception as e:
        logger.exception(f"Unexpected error: {e}")
        return 1

    logger.info("=" * 60)
    logger.info(f"Video: {run.video_path}")
    logger.info(f"Caption: {run.caption_path}")
    logger.info(f"Hashtags: {run.hashtags_path}")
    logger.info("=" * 60)
    return 0


if __name__ == "__main__":
    sys.exit(main())
