"""
Customization Preset Resolution

Applies named customization presets to a template customization. Presets are
composable and later presets override earlier ones, so a color preset can be mixed
with a font preset and a spacing preset.

Examples:
    # Apply multiple presets (later overrides earlier)
    >>> apply_presets(customization, ["colors_navy", "fonts_serif"])

    # Mix base preset with override
    >>> apply_presets(customization, ["spacing_compact", "layout_no_sidebar"])
"""

import os
from pathlib import Path
from typing import Any, Dict, List

from dotenv import load_dotenv
from omegaconf import OmegaConf

from folio.contexts.templating.customization import CUSTOMIZATION_GROUPS, TemplateCustomization

load_dotenv()
CUSTOMIZATION_PRESETS_PATH = Path(
    os.getenv("CUSTOMIZATION_PRESETS_PATH", Path(__file__).parent / "presets.yaml")
)


def load_customization_presets(config_path: Path = None) -> Dict[str, Any]:
    """
    Load presets.yaml and flatten it to a single-level dict.

    Collapses nested structure: colors.navy -> colors_navy. The category is the
    customization group the preset overrides.

    Args:
        config_path: Optional path to config file (defaults to CUSTOMIZATION_PRESETS_PATH)

    Returns:
        Flattened dict mapping preset names to partial customizations
        Example: {"colors_navy": {"colors": {...}}, "spacing_compact": {"spacing": {...}}}

    Raises:
        ValueError: If a category is not a customization group
    """
    if config_path is None:
        config_path = CUSTOMIZATION_PRESETS_PATH

    nested = OmegaConf.to_container(OmegaConf.load(config_path), resolve=True)

    flattened = {}
    for category, presets in nested.items():
        if category not in CUSTOMIZATION_GROUPS:
            raise ValueError(
                f"Preset category '{category}' in {config_path} is not a customization group. "
                f"Available groups: {list(CUSTOMIZATION_GROUPS)}"
            )
        for name, config in presets.items():
            flattened[f"{category}_{name}"] = {category: config}

    return flattened


def apply_presets(
    customization: TemplateCustomization,
    preset_names: List[str],
    config_path: Path = None,
) -> TemplateCustomization:
    """
    Apply named presets to a customization.

    Presets are applied in order, with later presets overriding earlier ones.

    Args:
        customization: Starting customization (left unchanged)
        preset_names: Preset names to apply (e.g., ["colors_navy", "spacing_compact"])
        config_path: Optional path to presets.yaml (defaults to CUSTOMIZATION_PRESETS_PATH)

    Returns:
        New customization with presets applied

    Raises:
        ValueError: If a preset is not found
    """
    presets_dict = load_customization_presets(config_path)

    for preset_name in preset_names:
        if preset_name not in presets_dict:
            available = list(presets_dict.keys())
            raise ValueError(f"Preset '{preset_name}' not found. Available presets: {available}")

        customization = customization.merged(presets_dict[preset_name])

    return customization
