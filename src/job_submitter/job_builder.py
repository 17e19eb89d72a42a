"""MediaConvert job builder.

Constructs complete MediaConvert job settings for one source object.

Output structure:
- One input: the source object, first audio program, embedded timecode
- One HLS output group writing to s3://<destination>/outputs/
- One output per rendition in the ladder
"""

from typing import Any

from ..shared.models import ObjectReference, RenditionDescriptor
from .renditions import DEFAULT_RENDITIONS, build_output

OUTPUT_GROUP_NAME = "File Group"
OUTPUT_PREFIX = "outputs/"

# HLS segmenting (seconds)
SEGMENT_LENGTH = 10
MIN_SEGMENT_LENGTH = 5

AUDIO_SELECTOR_NAME = "Audio Selector 1"


def build_job_settings(
    source: ObjectReference,
    destination_bucket: str,
    renditions: list[RenditionDescriptor] | None = None,
) -> dict[str, Any]:
    """Build complete MediaConvert job settings.

    The result depends only on the arguments, so the same object and
    configuration always produce the same job.

    Args:
        source: Object that triggered the job
        destination_bucket: Bucket receiving the renditions
        renditions: Output ladder (defaults to DEFAULT_RENDITIONS)

    Returns:
        MediaConvert job settings dictionary (passed to create_job API)

    Raises:
        ValueError: If the rendition list is empty

    Example:
        >>> settings = build_job_settings(ObjectReference(bucket="src", key="clip.mp4"), "out")
        >>> mediaconvert.create_job(Role=role_arn, Settings=settings)
    """
    if renditions is None:
        renditions = DEFAULT_RENDITIONS
    if not renditions:
        raise ValueError("At least one rendition is required to build a job")

    return {
        "AdAvailOffset": 0,
        "Inputs": [_build_input(source)],
        "OutputGroups": [_build_hls_output_group(destination_bucket, renditions)],
    }


def destination_uri(destination_bucket: str) -> str:
    """Return the S3 prefix renditions are written to."""
    return f"s3://{destination_bucket}/{OUTPUT_PREFIX}"


def _build_input(source: ObjectReference) -> dict[str, Any]:
    """Build input configuration with default audio and video selectors."""
    return {
        "FileInput": source.source_uri,
        "AudioSelectors": {
            AUDIO_SELECTOR_NAME: {
                "Offset": 0,
                "DefaultSelection": "DEFAULT",
                "ProgramSelection": 1,
            },
        },
        "VideoSelector": {
            "ColorSpace": "FOLLOW",
        },
        "FilterEnable": "AUTO",
        "PsiControl": "USE_PSI",
        "DeblockFilter": "DISABLED",
        "DenoiseFilter": "DISABLED",
        "FilterStrength": 0,
        "TimecodeSource": "EMBEDDED",
    }


def _build_hls_output_group(
    destination_bucket: str,
    renditions: list[RenditionDescriptor],
) -> dict[str, Any]:
    """Build HLS output group configuration.

    Structure:
    - Master playlist (.m3u8) for all renditions
    - Media playlist and segments per rendition, suffixed by its name modifier
    """
    return {
        "Name": OUTPUT_GROUP_NAME,
        "OutputGroupSettings": {
            "Type": "HLS_GROUP_SETTINGS",
            "HlsGroupSettings": {
                "Destination": destination_uri(destination_bucket),
                "SegmentLength": SEGMENT_LENGTH,
                "MinSegmentLength": MIN_SEGMENT_LENGTH,
            },
        },
        "Outputs": [build_output(rendition) for rendition in renditions],
    }
