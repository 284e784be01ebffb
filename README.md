# petrosurvive

The engine-side logic of a small 3D survival game, built on NumPy. It computes
the data a renderer needs: camera matrices, bone poses, fallback textures,
materials, particle buffers and instanced draw batches. It has no windowing
or GPU code of its own.

## Installation

```
pip install .
```

To run the tests, install the test extra and run pytest:

```
pip install .[test]
pytest
```

## Modules

- `petrosurvive.animation_state` contains `AnimationState`. It is a timer over
  a fixed duration. `progress()` reports the elapsed fraction clamped to
  [0, 1], and `is_finished()` is true when that fraction reaches 1. The timer
  also holds optional `start` and `target` values, which
  `start_animation(start, target)` sets. If both the duration and the timer
  are ints, progress uses integer division.
- `petrosurvive.camera` contains `Camera`, a perspective camera driven by yaw
  and pitch, and `CameraMovement` (`FORWARD`, `BACKWARD`, `LEFT`, `RIGHT`).
  The camera provides:
  - `view_matrix()` and `projection_matrix()`. The projection uses a 0.1 to
    100 depth range and the scene aspect ratio.
  - `process_keyboard`, `process_mouse_movement` (pitch can be constrained to
    ±89°) and `process_mouse_scroll` (zoom is clamped to 1–45).
  - `set_yaw`, `set_pitch` and `update_scene_size`.

  The module also has the matrix helpers `look_at`, `perspective` and `ortho`.
  All three are right-handed with clip depth in [-1, 1].
- `petrosurvive.camera_controller` contains `CameraController`. On each
  `update(delta_time)` it eases the camera towards a target plus an offset
  (default `(8, 8, 8)`). `shake(intensity, duration)` adds a random jitter
  that decays over the given duration. You can pass your own `random.Random`
  for reproducible shakes.
- `petrosurvive.bone` contains `Bone`, the keyframe types `KeyPosition`,
  `KeyRotation` (quaternions as `(w, x, y, z)`) and `KeyScale`, and `BoneInfo`.
  It also has `slerp` and `quat_to_mat4`. `Bone.update(t)` interpolates
  translation, rotation and scale into `local_transform`. If `t` lies past the
  last key of a channel, `ValueError` is raised.
- `petrosurvive.animation` contains `Animation`. You build it from:
  - a node hierarchy of `NodeData`,
  - per-bone keyframe `Channel`s,
  - a `Skeleton`, which maps bone names to palette slots.

  Channels whose names are not yet in the skeleton get new slots.
  `find_bone(name)` looks up a bone of the clip.
- `petrosurvive.animator` contains `Animator`. It advances an `Animation` in
  ticks and loops it over the clip duration. It writes a 200-entry bone
  palette to `final_bone_matrices`. `play_animation(clip, blend_duration)`
  cross-fades linearly from the current clip to the new one. `speed` scales
  time.
- `petrosurvive.texture` contains `Texture`, `TextureType` and
  `TextureManager`, a registry of textures by name. It also has the built-in
  16×16 RGBA fallbacks, registered by `manage_defaults()`:
  - white: `static_white_texture`
  - black: `static_black_texture`
  - flat normal: `static_normal_texture`
  - PBR default, roughness 1 and metallic 0: `static_pbr_default_texture`

  `get` raises `KeyError` for an unknown name; `try_get` returns `None`.
- `petrosurvive.material` contains `Material`, `MaterialBuilder` and
  `MaterialManager`. `Material` holds six texture slots and the metallic,
  roughness and AO factors. `MaterialBuilder` is a fluent builder that can
  start from a reference material. `create()` fills empty slots from a
  `TextureManager`'s built-in textures and raises `KeyError` if they are not
  registered. `MaterialManager` is a registry of materials by name.
- `petrosurvive.particles` contains `ParticleSystem`, a fixed ring pool of
  particles (default 10000), and `ParticleProps`. The pool supports:
  - `emit(props)`, which applies random velocity, size and stretch variation.
  - `update(delta_time)`, which ages and moves particles.
  - `gpu_data()`, which returns one row of 12 floats per live particle:
    position and size, direction and stretch, then colour. Size and colour
    are interpolated over the particle's life.
- `petrosurvive.renderer` contains `Renderer`. Register draws with
  `submit_model` and `submit_mesh`. `flush(shader)` then groups them by
  object and does three things:
  - writes the per-instance transforms, emissions and bone palettes,
  - sets the batch uniforms on `shader` through `set_bool`, `set_int`,
    `set_float` and `set_vec3`,
  - calls each object's `draw_instanced(shader, count)`.

  `flush` returns the issued `DrawBatch` list. Instances are capped at
  `max_instances`. `begin_frame()` starts a new frame.

## Example

```python
import numpy as np

from petrosurvive.camera import Camera, CameraMovement
from petrosurvive.camera_controller import CameraController

camera = Camera()
camera.process_keyboard(CameraMovement.FORWARD, 0.5)
view = camera.view_matrix()
proj = camera.projection_matrix()
view_proj = proj @ view

controller = CameraController(camera)
controller.set_target(np.array([1.0, 0.0, 2.0]), immediate=True)
controller.shake(0.3, 0.5)
controller.update(1 / 60)
```

## What this package does not do

- It has no lights and no shadow-map matrices.
- It does not cache shader uniforms. The renderer passes every value straight
  to the object you hand to `flush`.
- It does not load model, animation or image files. Hierarchies, keyframes
  and pixel data are built in code.
- It opens no window and uploads nothing to a GPU. Drawing is whatever the
  submitted objects' `draw_instanced` does.