"""Extractors for media components: images, viewers and players."""

from __future__ import annotations

import typing as typ

from website_tree._constants import IMAGE_LINK_TYPES
from website_tree.elements._common import (
    as_number,
    read_options,
    web_image,
)
from website_tree.elements.models import (
    AnnotatedImageElement,
    AudioPlayerElement,
    CarouselOptions,
    HeroOptions,
    IframeElement,
    IiifViewerElement,
    ImageElement,
    ImageGalleryElement,
    ThreeDViewerElement,
    VideoElement,
)
from website_tree.properties import find_by_label_and_value, value_by_label

if typ.TYPE_CHECKING:
    from website_tree.elements._common import ExtractionContext

OBJ_MODEL_FORMAT = "model/obj"
SIZED_DIMENSIONS = {"height": "height", "width": "width"}


def extract_3d_viewer(ctx: ExtractionContext) -> ThreeDViewerElement:
    link = ctx.require_link(
        lambda link: link.category == "resource" and link.file_format == OBJ_MODEL_FORMAT,
        "Resource link",
    )
    return ThreeDViewerElement(
        **ctx.common,
        link_uuid=typ.cast("str", link.uuid),
        file_size=link.file_size,
        **read_options(
            ctx.options,
            flags={
                "is_interactive": "is-interactive",
                "is_controls_displayed": "controls-displayed",
            },
        ),
    )


def extract_annotated_image(ctx: ExtractionContext) -> AnnotatedImageElement:
    link = ctx.require_link(lambda link: link.type in IMAGE_LINK_TYPES, "Image link")
    return AnnotatedImageElement(
        **ctx.common,
        link_uuid=typ.cast("str", link.uuid),
        **read_options(
            ctx.options,
            flags={
                "is_filter_input_displayed": "filter-input-displayed",
                "is_options_displayed": "options-displayed",
                "is_annotation_highlights_displayed": "annotation-highlights-displayed",
                "is_annotation_tooltips_displayed": "annotation-tooltips-displayed",
            },
        ),
    )


def extract_audio_player(ctx: ExtractionContext) -> AudioPlayerElement:
    link = ctx.require_link(lambda link: link.type == "audio", "Audio link")
    return AudioPlayerElement(
        **ctx.common,
        link_uuid=typ.cast("str", link.uuid),
        **read_options(
            ctx.options,
            flags={
                "is_speed_controls_displayed": "speed-controls-displayed",
                "is_volume_controls_displayed": "volume-controls-displayed",
                "is_seek_bar_displayed": "seek-bar-displayed",
            },
        ),
    )


def extract_iframe(ctx: ExtractionContext) -> IframeElement:
    link = ctx.find_link(lambda link: link.type == "webpage")
    if link is None or not link.href:
        raise ctx.missing("URL")
    return IframeElement(
        **ctx.common,
        href=link.href,
        **read_options(ctx.options, text=SIZED_DIMENSIONS),
    )


def extract_iiif_viewer(ctx: ExtractionContext) -> IiifViewerElement:
    link = ctx.require_link(lambda link: link.type == "IIIF", "Manifest link")
    return IiifViewerElement(
        **ctx.common,
        link_uuid=typ.cast("str", link.uuid),
        **read_options(ctx.options, text={"variant": "variant"}),
    )


def extract_image(ctx: ExtractionContext) -> ImageElement:
    """Build an image element from every link that carries a uuid.

    More than one image gets carousel options (five seconds per image unless
    the ``variant = carousel`` sub-tree says otherwise); the hero variant gets
    hero options.
    """
    options = read_options(
        ctx.options,
        text={
            "image_quality": "image-quality",
            "variant": "variant",
            "caption_layout": "layout-caption",
            "caption_source": "source-caption",
            "alt_text_source": "alt-text-source",
        },
        flags={
            "is_full_width": "is-full-width",
            "is_full_height": "is-full-height",
            "is_transparent_background": "is-transparent",
            "is_cover": "is-cover",
        },
        numbers=SIZED_DIMENSIONS,
        label=ctx.label,
    )
    quality = options.get("image_quality", "high")
    images = [web_image(link, quality) for link in ctx.links if link.uuid is not None]
    if not images:
        raise ctx.missing("Image link")

    carousel = find_by_label_and_value(ctx.options, "variant", "carousel")
    hero = find_by_label_and_value(ctx.options, "variant", "hero")

    carousel_options = None
    if len(images) > 1:
        seconds = (
            value_by_label(carousel.properties, "seconds-per-image")
            if carousel is not None
            else None
        )
        seconds_per_image = (
            as_number(seconds, label=ctx.label) if seconds is not None else None
        )
        carousel_options = (
            CarouselOptions(seconds_per_image=seconds_per_image)
            if seconds_per_image is not None
            else CarouselOptions()
        )

    hero_options = None
    if hero is not None:
        hero_options = HeroOptions(
            **read_options(
                hero.properties,
                flags={
                    "is_background_image_displayed": "background-image-displayed",
                    "is_document_displayed": "document-displayed",
                },
            )
        )

    return ImageElement(
        **ctx.common,
        images=images,
        carousel_options=carousel_options,
        hero_options=hero_options,
        **options,
    )


def extract_image_gallery(ctx: ExtractionContext) -> ImageGalleryElement:
    link = ctx.require_link(
        lambda link: link.category in {"tree", "set"}, "Image gallery link"
    )
    return ImageGalleryElement(
        **ctx.common,
        link_uuid=typ.cast("str", link.uuid),
        **read_options(
            ctx.options, flags={"is_filter_input_displayed": "filter-input-displayed"}
        ),
    )


def extract_video(ctx: ExtractionContext) -> VideoElement:
    link = ctx.require_link(lambda link: link.type == "video", "Video link")
    return VideoElement(
        **ctx.common,
        link_uuid=typ.cast("str", link.uuid),
        **read_options(ctx.options, flags={"is_chapters_displayed": "chapters-displayed"}),
    )


__all__ = [
    "extract_3d_viewer",
    "extract_annotated_image",
    "extract_audio_player",
    "extract_iframe",
    "extract_iiif_viewer",
    "extract_image",
    "extract_image_gallery",
    "extract_video",
]
