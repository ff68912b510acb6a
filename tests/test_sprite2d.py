import math

import pytest

from sceneforge.entity import Vector3
from sceneforge.objects import ObjectRegistry
from sceneforge.sprite2d import Sprite2D, Vertex2D


def make_sprite(pos=Vector3(10.0, 20.0, 0.0), vertical=2.0, width=3.0):
    registry = ObjectRegistry()
    sprite = Sprite2D(registry)
    sprite.pos = pos
    sprite.set_size(vertical, width)
    sprite.init()
    return registry, sprite


def test_registered_at_default_priority():
    registry, sprite = make_sprite()
    assert sprite in registry.objects(2)


def test_init_builds_four_vertices_with_default_tex():
    _, sprite = make_sprite()
    assert len(sprite.vertices) == 4
    assert [v.tex for v in sprite.vertices] == [(0.0, 0.0), (1.0, 0.0), (0.0, 1.0), (1.0, 1.0)]
    assert all(v.rhw == 1.0 for v in sprite.vertices)


def test_vertices_surround_position():
    pos = Vector3(10.0, 20.0, 0.0)
    _, sprite = make_sprite(pos=pos, vertical=2.0, width=3.0)
    v = sprite.vertices
    assert v[1].pos.x - v[0].pos.x == pytest.approx(2 * sprite.width)
    assert v[2].pos.y - v[0].pos.y == pytest.approx(2 * sprite.vertical)
    assert (v[0].pos.x + v[3].pos.x) / 2 == pytest.approx(pos.x)
    assert (v[0].pos.y + v[3].pos.y) / 2 == pytest.approx(pos.y)
    assert all(vertex.pos.z == 0.0 for vertex in v)


def test_set_size_diagonal():
    _, sprite = make_sprite(vertical=2.0, width=3.0)
    assert sprite.length == pytest.approx(2.5)
    assert math.tan(sprite.angle) == pytest.approx(3.0 / 4.0)


def test_update_before_init_raises():
    sprite = Sprite2D(ObjectRegistry())
    with pytest.raises(RuntimeError):
        sprite.update()


def test_update_applies_colour_and_position():
    _, sprite = make_sprite()
    colour = (0.5, 0.25, 0.0, 1.0)
    sprite.col = colour
    sprite.pos = Vector3(-4.0, 8.0, 0.0)
    sprite.update()
    assert all(v.col == colour for v in sprite.vertices)
    assert (sprite.vertices[0].pos.x + sprite.vertices[3].pos.x) / 2 == pytest.approx(-4.0)


def test_animate_waits_for_interval():
    _, sprite = make_sprite()
    for _ in range(4):
        sprite.animate(2.0, 4)
    assert [v.tex for v in sprite.vertices] == [(0.0, 0.0), (1.0, 0.0), (0.0, 1.0), (1.0, 1.0)]
    sprite.animate(2.0, 4)
    assert sprite.pattern_anim == 1
    assert sprite.cnt_anim == 0
    assert sprite.vertices[0].tex[0] == pytest.approx(0.25)
    assert sprite.vertices[2].tex[1] == pytest.approx(0.5)


def test_animate_wraps_pattern():
    _, sprite = make_sprite()
    for _ in range(5 * 4):
        sprite.animate(1.0, 4)
    assert sprite.pattern_anim == 0
    assert sprite.vertices[0].tex[0] == 0.0


def test_animate_before_init_raises():
    sprite = Sprite2D(ObjectRegistry())
    with pytest.raises(RuntimeError):
        sprite.animate(1.0, 4)


def test_set_tex_size_offset_shifts_all_u():
    _, sprite = make_sprite()
    sprite.set_tex_size(2.0, 4.0, 0.0)
    base = [v.tex for v in sprite.vertices]
    sprite.set_tex_size(2.0, 4.0, 3.0)
    shifted = [v.tex for v in sprite.vertices]
    shifts = [s[0] - b[0] for s, b in zip(shifted, base)]
    assert all(shift == pytest.approx(shifts[0]) for shift in shifts)
    assert [s[1] for s in shifted] == [b[1] for b in base]
    assert base[0] == (0.0, 0.0)


def test_draw_returns_texture_and_vertices():
    _, sprite = make_sprite()
    sprite.bind_texture("tex")
    texture, vertices = sprite.draw()
    assert texture == "tex"
    assert len(vertices) == 4
    assert isinstance(vertices[0], Vertex2D) and vertices[0] is sprite.vertices[0]


def test_uninit_releases_and_purges():
    registry, sprite = make_sprite()
    sprite.bind_texture("tex")
    sprite.uninit()
    assert sprite.vertices is None
    assert sprite.texture is None
    assert sprite.dead is True
    registry.purge_dead()
    assert sprite not in registry.objects(2)