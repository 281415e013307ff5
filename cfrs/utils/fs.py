"""Atomic filesystem operations for image export and YAML job files.

Provides:
    - Atomic writes: tmp file → fsync → rename (prevents partial reads)
    - Atomic image saving through Pillow, including multi-frame formats
    - YAML loading with safe_load
    - Directory creation with exist_ok semantics

A viewer polling the output path (e.g. an image preview refreshing on
change) never sees a half-written PNG or GIF.

All paths use pathlib.Path for cross-platform compatibility.

Usage:
    from cfrs.utils import fs
    fs.atomic_save_image(rgba, "out/drawing.png")
    job = fs.load_yaml("configs/jobs/spiral.yaml")
"""

import os
from pathlib import Path
from typing import Any, Dict, Optional, Sequence, Union

import numpy as np
import yaml
from PIL import Image


def ensure_dir(p: Union[str, Path]) -> Path:
    """Create directory if it doesn't exist, return Path object.

    Parameters
    ----------
    p : Union[str, Path]
        Directory path

    Returns
    -------
    Path
        Path object (guaranteed to exist)
    """
    p = Path(p)
    p.mkdir(parents=True, exist_ok=True)
    return p


def atomic_write_bytes(
    path: Union[str, Path],
    data: bytes,
    tmp_suffix: str = ".tmp"
) -> None:
    """Write bytes to file atomically (tmp → fsync → rename).

    Parameters
    ----------
    path : Union[str, Path]
        Target file path
    data : bytes
        Data to write
    tmp_suffix : str
        Temporary file suffix, default ".tmp"

    Raises
    ------
    RuntimeError
        If the write or rename fails (tmp file is removed).
    """
    path = Path(path)
    ensure_dir(path.parent)

    tmp_path = path.with_suffix(path.suffix + tmp_suffix)

    try:
        with open(tmp_path, 'wb') as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        tmp_path.replace(path)
    except Exception as e:
        if tmp_path.exists():
            tmp_path.unlink()
        raise RuntimeError(f"Failed to write {path} atomically: {e}") from e


def _to_pil(img: np.ndarray) -> Image.Image:
    """Convert an (H, W), (H, W, 3) or (H, W, 4) array to a PIL image."""
    if img.dtype != np.uint8:
        img = np.clip(img, 0, 255).astype(np.uint8)
    if img.ndim == 3 and img.shape[2] == 1:
        img = img.squeeze(2)
    return Image.fromarray(img)


def atomic_save_image(
    img: np.ndarray,
    path: Union[str, Path],
    pil_kwargs: Optional[Dict[str, Any]] = None,
    append_frames: Optional[Sequence[np.ndarray]] = None,
) -> None:
    """Save image atomically (prevents partial reads).

    Parameters
    ----------
    img : np.ndarray
        Image data, (H, W, C) uint8 with C in {1, 3, 4}, or (H, W) uint8.
        Other dtypes are clipped to [0, 255].
    path : Union[str, Path]
        Target file path (extension determines format)
    pil_kwargs : Optional[Dict[str, Any]]
        Additional kwargs for PIL.Image.save (e.g., quality=95, loop=0)
    append_frames : Optional[Sequence[np.ndarray]]
        Extra frames for multi-frame formats (GIF). When given, the image
        is saved with ``save_all=True`` and these frames appended in order.

    Raises
    ------
    RuntimeError
        If Pillow fails to encode or the rename fails.
    """
    path = Path(path)
    ensure_dir(path.parent)
    pil_kwargs = dict(pil_kwargs or {})

    pil_img = _to_pil(img)
    if append_frames:
        pil_kwargs['save_all'] = True
        pil_kwargs['append_images'] = [_to_pil(frame) for frame in append_frames]

    # Keep the real extension last so Pillow can infer the format
    tmp_path = path.with_name(path.stem + ".tmp" + path.suffix)
    try:
        pil_img.save(tmp_path, **pil_kwargs)
        tmp_path.replace(path)
    except Exception as e:
        if tmp_path.exists():
            tmp_path.unlink()
        raise RuntimeError(f"Failed to save image {path} atomically: {e}") from e


def atomic_yaml_dump(obj: Any, path: Union[str, Path]) -> None:
    """Save object as YAML atomically (safe_dump, insertion order kept)."""
    yaml_str = yaml.safe_dump(
        obj,
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True
    )
    atomic_write_bytes(path, yaml_str.encode('utf-8'))


def load_yaml(path: Union[str, Path]) -> Dict[str, Any]:
    """Load YAML file safely.

    Parameters
    ----------
    path : Union[str, Path]
        YAML file path

    Returns
    -------
    Dict[str, Any]
        Parsed YAML content

    Raises
    ------
    FileNotFoundError
        If file doesn't exist
    yaml.YAMLError
        If YAML parsing fails
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"YAML file not found: {path}")

    try:
        with open(path, 'r', encoding='utf-8') as f:
            return yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise yaml.YAMLError(f"Failed to parse YAML file {path}: {e}") from e
