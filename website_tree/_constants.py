"""Reserved labels of the presentation vocabulary.

The website convention is layered on ordinary property nodes: a property
labelled ``presentation`` marks a node's structural role and hosts the
sub-trees that carry styles, titles and component options.

Examples
--------
>>> from website_tree import _constants
>>> _constants.CSS_TIERS["mobile"]
'css-mobile'
"""

PRESENTATION = "presentation"
COMPONENT = "component"
TITLE = "title"
SIDEBAR = "sidebar"

CSS_TIERS = {
    "default": "css",
    "tablet": "css-tablet",
    "mobile": "css-mobile",
}

DEFAULT_LANGUAGE = "eng"
TITLE_LABEL_NOTE = "Title label"

IMAGE_LINK_TYPES = frozenset({"image", "IIIF"})
