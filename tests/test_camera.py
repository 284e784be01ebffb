import math

import numpy as np
import pytest

from petrosurvive.camera import Camera, CameraMovement, look_at, ortho, perspective


def test_default_front_looks_down_negative_z():
    cam = Camera()
    np.testing.assert_allclose(cam.front, [0.0, 0.0, -1.0], atol=1e-12)


@pytest.mark.parametrize("yaw,pitch", [(-90.0, 0.0), (30.0, 20.0), (170.0, -60.0)])
def test_basis_is_orthonormal(yaw, pitch):
    cam = Camera(yaw=yaw, pitch=pitch)
    for v in (cam.front, cam.right, cam.up):
        assert np.linalg.norm(v) == pytest.approx(1.0)
    assert np.dot(cam.front, cam.right) == pytest.approx(0.0, abs=1e-12)
    assert np.dot(cam.front, cam.up) == pytest.approx(0.0, abs=1e-12)
    assert np.dot(cam.right, cam.up) == pytest.approx(0.0, abs=1e-12)


def test_view_matrix_maps_position_to_origin():
    cam = Camera(position=(3.0, -2.0, 5.0), yaw=10.0, pitch=15.0)
    p = cam.view_matrix() @ np.append(cam.position, 1.0)
    np.testing.assert_allclose(p, [0.0, 0.0, 0.0, 1.0], atol=1e-12)


def test_look_at_puts_center_on_negative_z_axis():
    eye = (1.0, 2.0, 3.0)
    center = (4.0, 6.0, 3.0)
    view = look_at(eye, center, (0.0, 0.0, 1.0))
    p = view @ np.array([*center, 1.0])
    assert p[0] == pytest.approx(0.0, abs=1e-12)
    assert p[1] == pytest.approx(0.0, abs=1e-12)
    assert p[2] < 0
    rot = view[:3, :3]
    np.testing.assert_allclose(rot @ rot.T, np.identity(3), atol=1e-12)


def test_perspective_maps_near_and_far_planes():
    near, far = 0.1, 100.0
    proj = perspective(math.radians(45.0), 1.5, near, far)
    p_near = proj @ np.array([0.0, 0.0, -near, 1.0])
    p_far = proj @ np.array([0.0, 0.0, -far, 1.0])
    assert p_near[2] / p_near[3] == pytest.approx(-1.0)
    assert p_far[2] / p_far[3] == pytest.approx(1.0)


def test_ortho_maps_box_corners_to_clip_cube():
    proj = ortho(-2.0, 6.0, -1.0, 3.0, -10.0, 10.0)
    low = proj @ np.array([-2.0, -1.0, 10.0, 1.0])
    high = proj @ np.array([6.0, 3.0, -10.0, 1.0])
    np.testing.assert_allclose(low, [-1.0, -1.0, -1.0, 1.0], atol=1e-12)
    np.testing.assert_allclose(high, [1.0, 1.0, 1.0, 1.0], atol=1e-12)


def test_projection_matrix_uses_zoom_and_aspect():
    cam = Camera()
    cam.update_scene_size(1024.0, 512.0)
    cam.process_mouse_scroll(5.0)
    expected = perspective(math.radians(cam.zoom), cam.aspect(), 0.1, 100.0)
    np.testing.assert_allclose(cam.projection_matrix(), expected)


def test_aspect_tracks_scene_size():
    cam = Camera()
    cam.update_scene_size(1024.0, 512.0)
    assert cam.aspect() * cam.scene_height == pytest.approx(cam.scene_width)


def test_aspect_zero_height_falls_back_to_one():
    cam = Camera()
    cam.update_scene_size(640.0, 0.0)
    assert cam.aspect() == 1.0


def test_zoom_is_clamped():
    cam = Camera()
    cam.process_mouse_scroll(100.0)
    assert cam.zoom == 1.0
    cam.process_mouse_scroll(-100.0)
    assert cam.zoom == 45.0


def test_mouse_movement_constrains_pitch():
    cam = Camera()
    cam.process_mouse_movement(0.0, 10000.0, True)
    assert cam.pitch == 89.0
    cam.process_mouse_movement(0.0, -100000.0, True)
    assert cam.pitch == -89.0


def test_mouse_movement_unconstrained_pitch():
    cam = Camera()
    cam.process_mouse_movement(0.0, 10000.0, False)
    assert cam.pitch > 89.0


def test_mouse_movement_scales_by_sensitivity():
    cam = Camera(yaw=0.0)
    cam.process_mouse_movement(20.0, 0.0, True)
    assert cam.yaw == pytest.approx(20.0 * cam.mouse_sensitivity)


def test_set_pitch_clamps():
    cam = Camera()
    cam.set_pitch(120.0)
    assert cam.pitch == 89.0
    cam.set_pitch(-120.0)
    assert cam.pitch == -89.0


def test_set_yaw_without_update_keeps_vectors():
    cam = Camera()
    before = cam.front
    cam.set_yaw(0.0, update_vectors=False)
    np.testing.assert_allclose(cam.front, before)
    cam.set_yaw(0.0)
    assert not np.allclose(cam.front, before)


def test_keyboard_forward_moves_along_front():
    cam = Camera(position=(1.0, 1.0, 1.0), yaw=25.0, pitch=10.0)
    start = cam.position.copy()
    cam.process_keyboard(CameraMovement.FORWARD, 0.4)
    delta = cam.position - start
    assert np.linalg.norm(delta) == pytest.approx(cam.movement_speed * 0.4)
    np.testing.assert_allclose(delta / np.linalg.norm(delta), cam.front)


@pytest.mark.parametrize(
    "there,back",
    [
        (CameraMovement.FORWARD, CameraMovement.BACKWARD),
        (CameraMovement.LEFT, CameraMovement.RIGHT),
    ],
)
def test_opposite_moves_cancel(there, back):
    cam = Camera(position=(2.0, 0.0, -3.0), yaw=45.0)
    start = cam.position.copy()
    cam.process_keyboard(there, 0.3)
    assert not np.allclose(cam.position, start)
    cam.process_keyboard(back, 0.3)
    np.testing.assert_allclose(cam.position, start, atol=1e-12)