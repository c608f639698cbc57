"""Loading mesh geometry from glTF 2.0 files (``.gltf`` and ``.glb``).

Only the first mesh of a file is read. Every primitive must be indexed with
16-bit indices, positions and normals must be three 32-bit floats and texture
coordinates two 32-bit floats.
"""

from __future__ import annotations

import base64
import json
import logging
import struct
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import unquote

import numpy as np

from noukit.mesh import Mesh

logger = logging.getLogger(__name__)

_GLB_MAGIC = b"glTF"
_CHUNK_JSON = 0x4E4F534A
_CHUNK_BIN = 0x004E4942

_COMPONENT_SIZES = {
    5120: 1,  # BYTE
    5121: 1,  # UNSIGNED_BYTE
    5122: 2,  # SHORT
    5123: 2,  # UNSIGNED_SHORT
    5125: 4,  # UNSIGNED_INT
    5126: 4,  # FLOAT
    5130: 8,  # DOUBLE
}

_TYPE_COMPONENTS = {
    "SCALAR": 1,
    "VEC2": 2,
    "VEC3": 3,
    "VEC4": 4,
    "MAT2": 4,
    "MAT3": 9,
    "MAT4": 16,
}

_INDEX_SIZE = 2
_VEC3_SIZE = 12
_VEC2_SIZE = 8

_UNSUPPORTED_HINT = (
    "Consider changing your GLTF export settings, or else this loader "
    "must be augmented to support the provided format."
)


class GLTFError(Exception):
    """Raised when a glTF file cannot be read or holds unsupported data."""


@dataclass(frozen=True)
class DataGetter:
    """Where an accessor's elements live inside a buffer."""

    data: bytes
    offset: int
    length: int
    stride: int
    element_size: int

    def _view(self, dtype: str, width: int) -> np.ndarray:
        """Copy the accessor's elements out as an array of ``width`` columns."""
        itemsize = np.dtype(dtype).itemsize
        if width == 1:
            shape: tuple[int, ...] = (self.length,)
            strides: tuple[int, ...] = (self.stride,)
        else:
            shape = (self.length, width)
            strides = (self.stride, itemsize)
        try:
            view = np.ndarray(
                shape, dtype=dtype, buffer=self.data, offset=self.offset, strides=strides
            )
        except (TypeError, ValueError) as exc:
            raise GLTFError("Accessor data lies outside its buffer.") from exc
        return view.copy()


def _parse_json(raw: bytes) -> dict:
    try:
        document = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise GLTFError(f"Invalid glTF JSON: {exc}") from exc
    if not isinstance(document, dict):
        raise GLTFError("Invalid glTF JSON: top level is not an object.")
    return document


def _split_glb(raw: bytes) -> tuple[dict, bytes | None]:
    """Return the JSON document and the binary chunk of a GLB container."""
    if len(raw) < 12:
        raise GLTFError("GLB file is too short.")
    magic, version, total = struct.unpack_from("<4sII", raw, 0)
    if magic != _GLB_MAGIC:
        raise GLTFError("Not a GLB file: bad magic.")
    if version != 2:
        raise GLTFError(f"Unsupported GLB version {version}.")
    end = min(total, len(raw))

    chunks: list[tuple[int, bytes]] = []
    offset = 12
    while offset + 8 <= end:
        chunk_len, chunk_type = struct.unpack_from("<II", raw, offset)
        start = offset + 8
        if start + chunk_len > end:
            raise GLTFError("GLB chunk extends past the end of the file.")
        chunks.append((chunk_type, raw[start:start + chunk_len]))
        offset = start + chunk_len

    if not chunks or chunks[0][0] != _CHUNK_JSON:
        raise GLTFError("GLB file does not begin with a JSON chunk.")
    document = _parse_json(chunks[0][1].rstrip(b" \x00"))
    binary = next((data for kind, data in chunks[1:] if kind == _CHUNK_BIN), None)
    return document, binary


def _load_buffers(document: dict, base: Path, binary: bytes | None) -> None:
    """Read every buffer's bytes into its ``"data"`` entry."""
    for index, buffer in enumerate(document.get("buffers", [])):
        uri = buffer.get("uri")
        if uri is None:
            if index != 0 or binary is None:
                raise GLTFError(f"Buffer {index} has no data.")
            data = binary
        elif uri.startswith("data:"):
            header, _, payload = uri.partition(",")
            if ";base64" not in header:
                raise GLTFError(f"Buffer {index} has an unsupported data URI.")
            try:
                data = base64.b64decode(payload, validate=True)
            except ValueError as exc:
                raise GLTFError(f"Buffer {index} has invalid base64 data.") from exc
        else:
            try:
                data = (base / unquote(uri)).read_bytes()
            except OSError as exc:
                raise GLTFError(f"Failed to read buffer {index} from {uri}: {exc}") from exc
        if len(data) < buffer.get("byteLength", 0):
            raise GLTFError(f"Buffer {index} is shorter than its byteLength.")
        buffer["data"] = data


def parse_gltf(filename: str) -> dict:
    """Read a ``.gltf`` or ``.glb`` file.

    Returns the glTF document as a dictionary in which every buffer entry
    carries its bytes under ``"data"``. The extension is everything after the
    first dot of ``filename``.
    """
    dot = filename.find(".")
    if dot == -1 or dot >= len(filename) - 1:
        raise GLTFError("Filename specified incorrectly - no extension!")
    ext = filename[dot + 1:]
    if ext not in ("gltf", "glb"):
        raise GLTFError("Filename specified incorrectly - not a GLTF or GLB!")

    path = Path(filename)
    try:
        raw = path.read_bytes()
    except OSError as exc:
        raise GLTFError(f"Failed to load .gltf: {filename}: {exc}") from exc

    if ext == "glb":
        document, binary = _split_glb(raw)
    else:
        document, binary = _parse_json(raw), None
    _load_buffers(document, path.parent, binary)
    return document


def find_accessor(primitive: dict, name: str) -> int | None:
    """Accessor index of the attribute ``name`` of a primitive, or ``None``."""
    return primitive.get("attributes", {}).get(name)


def build_getter(gltf: dict, accessor_index: int) -> DataGetter:
    """Locate the bytes of accessor ``accessor_index``."""
    try:
        accessor = gltf["accessors"][accessor_index]
        view = gltf["bufferViews"][accessor["bufferView"]]
        data = gltf["buffers"][view["buffer"]]["data"]
        count = accessor["count"]
    except (KeyError, IndexError, TypeError) as exc:
        raise GLTFError(f"Accessor {accessor_index} cannot be resolved.") from exc

    component = _COMPONENT_SIZES.get(accessor.get("componentType"))
    components = _TYPE_COMPONENTS.get(accessor.get("type"))
    if component is None or components is None:
        raise GLTFError(f"Accessor {accessor_index} has an unknown type.")
    size = component * components
    stride = view.get("byteStride", 0) or size
    offset = view.get("byteOffset", 0) + accessor.get("byteOffset", 0)
    return DataGetter(data, offset, count, stride, size)


def _gather(source: np.ndarray, order: np.ndarray, what: str) -> np.ndarray:
    try:
        return source[order]
    except IndexError as exc:
        raise GLTFError(f"Primitive index refers past the end of the {what} data.") from exc


def process_primitive(gltf: dict, geom_index: int, flip_uv_y: bool = True):
    """Expand one primitive of the first mesh into per-face-vertex arrays.

    Returns ``(verts, normals, uvs, warnings)``; ``normals`` or ``uvs`` is
    ``None`` when the primitive has no usable data for it.
    """
    try:
        geom = gltf["meshes"][0]["primitives"][geom_index]
    except (KeyError, IndexError, TypeError) as exc:
        raise GLTFError(f"No mesh primitive {geom_index}.") from exc

    warnings: list[str] = []

    indices = geom.get("indices")
    if indices is None:
        raise GLTFError(
            "File is missing primitive indices. Consider changing your GLTF export "
            "settings, or else this loader must be augmented to support files "
            "without indices."
        )
    face_getter = build_getter(gltf, indices)
    if face_getter.element_size != _INDEX_SIZE:
        raise GLTFError(
            f"Primitive indices are in a currently unsupported format. {_UNSUPPORTED_HINT}"
        )

    v_id = find_accessor(geom, "POSITION")
    if v_id is None:
        raise GLTFError(f"No vertex positions found in mesh primitive {geom_index}")

    n_id = find_accessor(geom, "NORMAL")
    if n_id is None:
        warnings.append(f"No normals found in mesh primitive {geom_index}")
    uv_id = find_accessor(geom, "TEXCOORD_0")
    if uv_id is None:
        warnings.append(f"No UVs found in mesh primitive {geom_index}")

    v_getter = build_getter(gltf, v_id)
    if v_getter.element_size != _VEC3_SIZE:
        raise GLTFError(
            f"Vertex position data is in a currently unsupported format. {_UNSUPPORTED_HINT}"
        )

    n_getter = None
    if n_id is not None:
        n_getter = build_getter(gltf, n_id)
        if n_getter.element_size != _VEC3_SIZE:
            n_getter = None
            warnings.append(
                f"Normal data is in a currently unsupported format. {_UNSUPPORTED_HINT}"
            )

    uv_getter = None
    if uv_id is not None:
        uv_getter = build_getter(gltf, uv_id)
        if uv_getter.element_size != _VEC2_SIZE:
            uv_getter = None
            warnings.append(
                f"UV data is in a currently unsupported format. {_UNSUPPORTED_HINT}"
            )

    order = face_getter._view("<u2", 1).astype(np.intp)
    verts = _gather(v_getter._view("<f4", 3), order, "position").astype(np.float32)

    normals = None
    if n_getter is not None:
        normals = _gather(n_getter._view("<f4", 3), order, "normal").astype(np.float32)

    uvs = None
    if uv_getter is not None:
        uvs = _gather(uv_getter._view("<f4", 2), order, "UV").astype(np.float32)
        if flip_uv_y:
            uvs[:, 1] = 1.0 - uvs[:, 1]

    return verts, normals, uvs, warnings


def extract_geometry(gltf: dict, mesh: Mesh, flip_uv_y: bool = True) -> list[str]:
    """Fill ``mesh`` from the first mesh of ``gltf``; returns the warnings."""
    meshes = gltf.get("meshes") or []
    if not meshes:
        raise GLTFError("No meshes in file.")
    primitives = meshes[0].get("primitives") or []
    if not primitives:
        raise GLTFError("No geometry data associated with mesh.")

    verts: list[np.ndarray] = []
    normals: list[np.ndarray] = []
    uvs: list[np.ndarray] = []
    warnings: list[str] = []
    has_normals = has_uvs = True

    for index in range(len(primitives)):
        p_verts, p_normals, p_uvs, p_warnings = process_primitive(gltf, index, flip_uv_y)
        verts.append(p_verts)
        warnings.extend(p_warnings)
        has_normals = has_normals and p_normals is not None
        has_uvs = has_uvs and p_uvs is not None
        if has_normals:
            normals.append(p_normals)
        if has_uvs:
            uvs.append(p_uvs)

    mesh.set_verts(np.concatenate(verts))
    if has_normals:
        mesh.set_normals(np.concatenate(normals))
    if has_uvs:
        mesh.set_uvs(np.concatenate(uvs))
    return warnings


def load_mesh(filename: str, mesh: Mesh, flip_uv_y: bool = True) -> list[str]:
    """Load the geometry of a glTF file into ``mesh``; returns the warnings."""
    try:
        gltf = parse_gltf(filename)
        warnings = extract_geometry(gltf, mesh, flip_uv_y)
    except GLTFError as exc:
        raise GLTFError(f"Error extracting mesh from {filename}: {exc}") from exc

    if warnings:
        logger.warning(
            "Warning(s) extracting mesh from %s: %s", filename, "; ".join(warnings)
        )
    logger.info("Loaded mesh from %s.", filename)
    return warnings