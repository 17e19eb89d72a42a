"""Output rendition ladder.

The ladder is a list of RenditionDescriptor values, one per output the HLS
group should produce. Presets carry the encoding details (codec, resolution,
bitrate), so a rendition only names the preset, the file extension and the
name suffix that keeps outputs from overwriting each other.
"""

from ..shared.models import RenditionDescriptor


# =============================================================================
# Default ladder - single 1080p HLS rendition
# =============================================================================

HLS_1080P = RenditionDescriptor(
    preset="System-Avc_16x9_1080p_29_97fps_8500kbps",
    extension="hls",
    name_modifier="_HLS1080",
)

DEFAULT_RENDITIONS: list[RenditionDescriptor] = [HLS_1080P]


def resolve_renditions(
    configured: list[RenditionDescriptor] | None,
) -> list[RenditionDescriptor]:
    """Return the configured ladder, or the default ladder when none is configured.

    Raises:
        ValueError: If two renditions share a name modifier, since their
            outputs would overwrite each other in the destination prefix.
    """
    renditions = list(configured) if configured else list(DEFAULT_RENDITIONS)

    seen: set[str] = set()
    for rendition in renditions:
        if rendition.name_modifier in seen:
            raise ValueError(f"Duplicate rendition name modifier '{rendition.name_modifier}'")
        seen.add(rendition.name_modifier)

    return renditions


def build_output(rendition: RenditionDescriptor) -> dict:
    """Build a MediaConvert output entry for one rendition."""
    output: dict = {
        "Preset": rendition.preset,
        "Extension": rendition.extension,
        "NameModifier": rendition.name_modifier,
    }
    if rendition.container:
        output["ContainerSettings"] = {"Container": rendition.container}
    return output
