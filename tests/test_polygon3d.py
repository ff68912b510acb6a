import pytest

from sceneforge.entity import Vector3, identity_matrix, translation_matrix
from sceneforge.objects import ObjectRegistry
from sceneforge.polygon3d import Polygon3D


def make_polygon(size=Vector3(2.0, 3.0, 4.0)):
    registry = ObjectRegistry()
    poly = Polygon3D(registry)
    poly.size = size
    poly.init()
    return registry, poly


def test_registered_at_default_priority():
    registry, poly = make_polygon()
    assert poly in registry.objects(2)


def test_init_vertices():
    size = Vector3(2.0, 3.0, 4.0)
    _, poly = make_polygon(size)
    v = poly.vertices
    assert len(v) == 4
    assert v[0].pos == Vector3(-size.x, -size.y, size.z)
    assert v[3].pos == Vector3(size.x, size.y, -size.z)
    assert all(vertex.nor == Vector3(0.0, 1.0, 0.0) for vertex in v)
    assert [vertex.tex for vertex in v] == [(0.0, 0.0), (1.0, 0.0), (0.0, 1.0), (1.0, 1.0)]


def test_vertices_symmetric_about_origin():
    _, poly = make_polygon()
    v = poly.vertices
    assert v[0].pos + v[3].pos == Vector3()
    assert v[1].pos + v[2].pos == Vector3()


def test_update_before_init_keeps_no_buffer():
    poly = Polygon3D(ObjectRegistry())
    poly.update()
    assert poly.vertices is None


def test_update_follows_size_and_colour():
    _, poly = make_polygon()
    new_size = Vector3(5.0, 6.0, 7.0)
    colour = (0.0, 0.5, 1.0, 0.5)
    poly.size = new_size
    poly.col = colour
    poly.update()
    assert poly.vertices[1].pos == Vector3(new_size.x, -new_size.y, new_size.z)
    assert all(v.col == colour for v in poly.vertices)


def test_draw_ignores_scale():
    _, poly = make_polygon()
    poly.scale = Vector3(2.0, 2.0, 2.0)
    matrix, _, _ = poly.draw()
    assert matrix == identity_matrix()
    assert poly.mtx_world == matrix


def test_draw_translates_by_position():
    _, poly = make_polygon()
    pos = Vector3(1.0, -2.0, 3.0)
    poly.pos = pos
    poly.bind_texture("grass")
    matrix, texture, vertices = poly.draw()
    assert matrix == translation_matrix(pos)
    assert texture == "grass"
    assert len(vertices) == 4


def test_uninit_clears_without_release():
    _, poly = make_polygon()
    poly.bind_texture("grass")
    poly.uninit()
    assert poly.vertices is None
    assert poly.texture is None
    assert poly.dead is False
    assert poly.draw()[2] == ()