"""Tests for the Asset Normalizer."""

import pytest

from faceless_video.core.exceptions import NormalizationError
from faceless_video.models.schemas import MediaAsset, MediaKind
from faceless_video.services.asset_normalizer import AssetNormalizer


@pytest.mark.parametrize(
    "name,kind",
    [
        ("clip.mp4", MediaKind.VIDEO),
        ("clip.MOV", MediaKind.VIDEO),
        ("clip.avi", MediaKind.VIDEO),
        ("photo.jpg", MediaKind.IMAGE),
        ("photo.JPEG", MediaKind.IMAGE),
        ("photo.png", MediaKind.IMAGE),
        ("photo.webp", MediaKind.IMAGE),
    ],
)
def test_asset_kind_from_extension(tmp_path, name, kind):
    assert MediaAsset.from_path(tmp_path / name).kind == kind


def test_normalize_all_mixed_assets(settings, logger, engine, make_media, media_duration, tmp_path):
    video = make_media(tmp_path / "in" / "ocean.mp4", 8.0)
    image = make_media(tmp_path / "in" / "ocean.jpg", 0.0)
    normalizer = AssetNormalizer(settings, logger, engine)

    clips, skipped = normalizer.normalize_all(
        [MediaAsset.from_path(video), MediaAsset.from_path(image)], tmp_path / "work"
    )

    assert skipped == []
    assert [clip.path.name for clip in clips] == ["processed-0.mp4", "processed-1.mp4"]
    assert media_duration(clips[0].path) == pytest.approx(8.0)
    assert media_duration(clips[1].path) == pytest.approx(5.0)
    assert [call[2] for call in engine.calls if call[0] == "scale_crop"] == [MediaKind.VIDEO, MediaKind.IMAGE]


def test_partial_failure_skips_bad_assets(settings, logger, engine_factory, make_media, tmp_path):
    """Test N assets with k < N failures keep the N-k survivors in order."""
    engine = engine_factory(fail_sources=["bad.mp4"])
    assets = [
        MediaAsset.from_path(make_media(tmp_path / "a.mp4", 3.0)),
        MediaAsset.from_path(make_media(tmp_path / "bad.mp4", 3.0)),
        MediaAsset.from_path(make_media(tmp_path / "c.mp4", 3.0)),
    ]
    normalizer = AssetNormalizer(settings, logger, engine)

    clips, skipped = normalizer.normalize_all(assets, tmp_path / "work")

    assert [clip.source.path.name for clip in clips] == ["a.mp4", "c.mp4"]
    assert [asset.path.name for asset in skipped] == ["bad.mp4"]
    assert not (tmp_path / "work" / "processed-1.mp4").exists()


def test_all_assets_failing_is_fatal(settings, logger, engine_factory, make_media, tmp_path):
    engine = engine_factory(fail_operations=["scale_crop"])
    assets = [MediaAsset.from_path(make_media(tmp_path / f"{i}.mp4", 3.0)) for i in range(3)]
    normalizer = AssetNormalizer(settings, logger, engine)

    with pytest.raises(NormalizationError):
        normalizer.normalize_all(assets, tmp_path / "work")


def test_normalization_is_repeatable(settings, logger, engine, make_media, media_duration, tmp_path):
    asset = MediaAsset.from_path(make_media(tmp_path / "clip.mov", 6.5))
    normalizer = AssetNormalizer(settings, logger, engine)

    first = normalizer.normalize(asset, tmp_path / "one.mp4")
    second = normalizer.normalize(asset, tmp_path / "two.mp4")

    assert media_duration(first.path) == media_duration(second.path)
