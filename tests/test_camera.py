import math

import numpy as np
import pygame
import pytest
from pygame.math import Vector3

from camera import Camera, OrbitController


@pytest.fixture
def camera():
    return Camera(position=(30.0, 25.0, 30.0), target=(0.0, 0.0, 0.0), width=1600, height=900)


def test_view_matrix_puts_target_on_negative_z(camera):
    target = camera.view_matrix() @ np.array((0.0, 0.0, 0.0, 1.0))
    assert target[:3] == pytest.approx((0.0, 0.0, -camera.distance()), abs=1e-9)


def test_projection_matches_fov(camera):
    m = camera.projection_matrix()
    assert m[1, 1] == pytest.approx(1.0 / math.tan(math.radians(30.0)))
    assert m[0, 0] == pytest.approx(m[1, 1] * 900 / 1600)


def test_set_aspect(camera):
    camera.set_aspect(800, 0)
    assert camera.aspect == 800
    camera.set_aspect(1000, 500)
    assert camera.aspect == 2.0


def test_initial_spherical_matches_camera(camera):
    controls = OrbitController(camera)
    radius, _, polar = controls.spherical()
    assert radius == pytest.approx(camera.distance())
    assert polar == pytest.approx(math.acos(25.0 / radius))


def test_zoom_is_clamped(camera):
    controls = OrbitController(camera)
    for _ in range(200):
        controls.zoom(10)
        controls.update()
    assert camera.distance() == pytest.approx(15.0)
    for _ in range(200):
        controls.zoom(-10)
        controls.update()
    assert camera.distance() == pytest.approx(100.0)


def test_polar_angle_is_clamped(camera):
    controls = OrbitController(camera)
    for _ in range(100):
        controls.rotate(0.0, -2000.0)
        controls.update()
    _, _, polar = controls.spherical()
    assert polar <= math.pi / 2.1 + 1e-9
    assert camera.position.y > 0.0
    for _ in range(100):
        controls.rotate(0.0, 2000.0)
        controls.update()
    _, _, polar = controls.spherical()
    assert polar >= 0.0
    assert camera.position.y <= camera.distance()


def test_damping_eases_rotation(camera):
    controls = OrbitController(camera)
    _, azimuth0, _ = controls.spherical()
    controls.rotate(-90.0, 0.0)
    controls.update()
    _, azimuth1, _ = controls.spherical()
    controls.update()
    _, azimuth2, _ = controls.spherical()
    first, second = azimuth1 - azimuth0, azimuth2 - azimuth1
    assert first > 0
    assert second == pytest.approx(first * 0.95)


def test_update_without_input_is_still(camera):
    controls = OrbitController(camera)
    controls.update()
    assert not controls.update()


def test_pan_moves_target(camera):
    controls = OrbitController(camera)
    for _ in range(5):
        controls.pan(50.0, 0.0)
        controls.update()
    assert controls.target != Vector3(0, 0, 0)
    assert camera.target == controls.target


def test_mouse_events(camera):
    controls = OrbitController(camera)
    start = Vector3(camera.position)
    controls.handle_event(pygame.event.Event(pygame.MOUSEWHEEL, x=0, y=3))
    controls.update()
    assert camera.distance() < start.distance_to(Vector3(0, 0, 0))

    controls.handle_event(pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=(0, 0)))
    controls.handle_event(pygame.event.Event(pygame.MOUSEMOTION, rel=(40, 0), pos=(40, 0), buttons=(1, 0, 0)))
    controls.handle_event(pygame.event.Event(pygame.MOUSEBUTTONUP, button=1, pos=(40, 0)))
    before = controls.spherical()[1]
    controls.update()
    assert controls.spherical()[1] != pytest.approx(before)

    # motion without a held button does nothing
    pending = controls._delta_azimuth
    controls.handle_event(pygame.event.Event(pygame.MOUSEMOTION, rel=(40, 0), pos=(80, 0), buttons=(0, 0, 0)))
    assert controls._delta_azimuth == pending
