# renderkit

Small, dependency-free building blocks for real-time rendering tools:

- `renderkit.vector`: `Vector2`, `Vector3` and `Vector4` dataclasses with
  element-wise and scalar arithmetic operators (including in-place forms),
  `dot`, `cross` (on `Vector3`), `magnitude`, `normalized`/`normalize`,
  `clean_to_zero`, `lerp`, `parse` from whitespace-separated text, and
  equality within `EPSILON` (see `float_equals`). Colour-style aliases are
  available (`u`/`v` on `Vector2`, `r`/`g`/`b`/`a` on the others), as are the
  conversions `Vector3.from_vector4` and `Vector4.from_vector3` and the
  constants `PI`, `TWO_PI`, `HALF_PI` and `QUARTER_PI`.
- `renderkit.quaternion`: `Quaternion` for rotations, with
  `from_angle_axis`, `to_angle_axis`, `multiply` (Hamilton product),
  `conjugate`, `inverse`, `norm`, `quadrance`, a column-major 4x4 rotation
  matrix as 16 floats (`gl_rotation_matrix`), and the interpolations
  `q_lerp` and `q_slerp`.
- `renderkit.rectpack`: a skyline rectangle packer (`RectPacker`, `Rect`,
  `Heuristic`) for building texture atlases, with bottom-left and best-fit
  placement.
- `renderkit.textlayout`, `renderkit.textundo`, `renderkit.textedit`: the
  cursor, selection and undo/redo logic of a single- or multi-line text field
  (`TextEditState`, `Key`, `TextBuffer`, `PlainText`, `UndoState`),
  independent of any GUI.

## Installation

```
pip install renderkit
```

For running the tests:

```
pip install "renderkit[test]"
pytest
```

## Examples

Vectors and quaternions:

```python
import math
from renderkit.vector import Vector3
from renderkit.quaternion import Quaternion, q_slerp

axis = Vector3(0, 1, 0)
q = Quaternion.from_angle_axis(math.pi / 2, axis)
theta, rot_axis = q.to_angle_axis()

halfway = q_slerp(Quaternion(1, 0, 0, 0), q, 0.5)
matrix = halfway.gl_rotation_matrix()  # 16 floats, column-major
```

Packing rectangles into an atlas. The third argument is the number of
skyline nodes the packer may use; giving at least the target width keeps
widths exact:

```python
from renderkit.rectpack import Heuristic, Rect, RectPacker

packer = RectPacker(256, 256, 256)
packer.set_heuristic(Heuristic.SKYLINE_BF_SORT_HEIGHT)
rects = [Rect(id=0, w=64, h=32), Rect(id=1, w=100, h=100)]
all_packed = packer.pack_rects(rects)
for rect in rects:
    print(rect.id, rect.x, rect.y, rect.was_packed)
```

Editing text. `PlainText` is a monospaced buffer split into rows at
newlines; any other layout can be plugged in by subclassing `TextBuffer`.
Characters are typed by passing a one-character string to `key`:

```python
from renderkit.textedit import Key, TextEditState
from renderkit.textlayout import PlainText

text = PlainText("hello")
state = TextEditState()
state.key(text, Key.TEXTEND)
state.paste(text, " world")
state.key(text, "!")
state.key(text, Key.LEFT | Key.SHIFT)
state.key(text, Key.UNDO)
print(str(text), state.cursor)
```

## What it does not do

renderkit only computes: it draws nothing. It has no window, no GPU
context, no shaders, textures, meshes or scene graph, and no command-line
tool. The text-editing state tracks cursor, selection and history but does
not render text, talk to a clipboard or receive input events on its own;
the caller feeds it keys and mouse positions.