# pars3d

pars3d is a small toolkit for triangle and polygon meshes. It uses only the
Python standard library.

Meshes are passed around as plain Python data. Vertices are sequences of floats.
Faces are sequences of vertex indices. Functions return tuples and lists.

## Installation

```
pip install .
```

## Modules

### `pars3d.quat`

This module has vector helpers: `add`, `sub`, `kmul`, `dot`, `cross`,
`length`, `normalize` and `dist`. `normalize` leaves the zero vector as zero.

It also has quaternion operations. Quaternions are stored as `(x, y, z, w)`,
with the scalar part last.

- `conj` and `quat_mul` conjugate and multiply quaternions.
- `quat_rot` rotates a 3-vector by a quaternion.
- `quat_from_to` builds the rotation that takes one direction onto another.
  Opposite directions are handled by turning half way round an orthogonal axis.
- `quat_from_axis_angle` builds a rotation from an axis and an angle.
- `quat_from_standard(fwd, up)` returns the rotation that takes the x axis to
  `fwd` and the y axis to `up`.
- `quat_from_basis(fwd, up, b0, b1)` returns the rotation that takes `b0` to
  `fwd` and `b1` to `up`.
- `quat_to_mat` returns the rows of the rotation matrix.
- `axis_angle_rot` rotates a vector about an axis using Rodrigues' formula.
- `orthogonal` returns a vector orthogonal to the one it is given.

These functions raise `ValueError` in two cases:

- `orthogonal` is given the zero vector.
- `quat_from_standard` or `quat_from_basis` is given a `fwd` and `up` that are
  not orthogonal.

### `pars3d.util`

- `rel_path_btwn(src, dst)` returns the relative `Path` from `src` to `dst`. If
  `src` is a file, the path starts from the file's directory. Both paths must
  exist; if one does not, `FileNotFoundError` is raised.
- `extension_to_format(path)` maps a file extension to a `FileFormat`. The
  members are `GLB`, `FBX`, `OBJ`, `PLY`, `STL`, `OFF` and `UNKNOWN`. Case is
  ignored.

### `pars3d.tri_to_quad`

`quadrangulate(vs, faces, planarity_eps, angle_eps, quad_pref)` greedily merges
pairs of adjacent, nearly coplanar triangles into quads. `quad_pref` is a
`QuadPreference`:

- `RIGHT_ANGLE` prefers quads whose corners are close to right angles.
- `SYMMETRIC` prefers quads whose opposite angles are most alike.

The function returns two lists:

- The new faces.
- For each new face, where it came from: `(a, b)` for a quad merged from faces
  `a` and `b`, or `(i, None)` for face `i` kept as it was.

### `pars3d.uv_svg`

`save_uv(dst, uvs, faces, stroke_width)` writes each face's UV outline as a
closed, unfilled black path to an SVG file. The canvas is 2048×2048.

### `pars3d.visualization`

Helpers that turn mesh data into colours or extra geometry:

- `vertex_scalar_coloring` rescales per-vertex scalars to [0, 1] and colours
  them with a function you supply. It can also draw optional isolines.
- `face_coloring` gives each face group a pseudo-random colour.
- `greedy_face_coloring` colours face groups from a palette so that adjacent
  groups differ. When the palette runs out, it reuses it with darker colours.
- `face_segmentation_wireframes` builds a black tube wireframe along the edges
  between faces of different groups.
- `colored_wireframe` builds a square tube around each edge, with one colour
  per edge. `per_vertex_colored_wireframe` does the same along a polyline.
- `optional_edge_vector_visualization` builds one coloured triangle per face
  edge, pointing toward the face centroid.
- `basis(v)` returns two vectors that, with the unit vector `v`, complete an
  orthonormal basis.

Each wireframe builder returns a tuple `(vertices, vertex_colors, quads)`.

### `pars3d.ply`

This module reads and writes ASCII PLY files.

- `Ply` is a dataclass. It holds vertex positions `v` and faces `f`. It can also
  hold per-vertex colours `vc`, normals `n`, UVs `uv` and `height`.
- `read_ply(stream)` and `read_ply_file(path)` parse a PLY file. Malformed input
  raises `PlyError`, a subclass of `ValueError`.
- `Ply.write(out)` writes the mesh to a text stream.

Only `float` and `uchar` vertex properties are understood. Faces with fewer than
three vertices are dropped. Lines after the declared data are logged as
warnings.

### `pars3d.stl`

This module reads and writes ASCII STL files.

- `Stl` holds a name and a list of `StlFace`. Each face has three positions and
  a normal.
- `read` and `read_from_file` parse a file. `write` serialises one.
- `Stl.to_tri_mesh(merge_distance)` indexes the triangle soup. It returns a list
  of vertices and a list of triangles. With a distance of `0.0`, only identical
  positions are shared.

### `pars3d.vrml`

- `read` and `read_from_file` scan VRML text for rows of three numbers. Rows
  with a decimal point become points; other rows become triangle indices. The
  result is gathered into `Shape`s inside a `VrmlGeometryOnly`.
- `VrmlGeometryOnly.to_vrml()` wraps each shape in its own `Group` and `Child`,
  inside a `Vrml`.

## Examples

```python
from pars3d.quat import quat_from_to, quat_rot

q = quat_from_to([1.0, 0.0, 0.0], [0.0, 1.0, 0.0])
print(quat_rot([1.0, 0.0, 0.0], q))  # approximately (0, 1, 0)
```

```python
from pars3d import stl

with open("model.stl") as fh:
    mesh = stl.read(fh)
vertices, triangles = mesh.to_tri_mesh(0.0)
```

```python
import io
from pars3d.ply import Ply

ply = Ply(v=[(0, 0, 0), (1, 0, 0), (0, 1, 0)], f=[(0, 1, 2)])
buf = io.StringIO()
ply.write(buf)
```

## What it does not do

- `extension_to_format` recognises GLB, FBX, OBJ and OFF files, but the package
  cannot read or write them. Only ASCII PLY, ASCII STL and VRML geometry are
  supported, and binary PLY and STL are not.
- VRML is only read, and only point and index rows are taken from it. Materials,
  transforms and other node fields are ignored.
- There is no common mesh or scene type that the formats convert into. Each
  reader returns its own data class.
- There is no command-line tool.

## Running the tests

```
pip install .[test]
pytest
```