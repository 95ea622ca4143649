import pytest
from OpenGL.GL import GL_FRONT

from core.light import AmbientLight, HemisphereLight, Light, LightRig, PointLight
from core.material import Material, basic_material, lambert_material, phong_material
from core.mesh import Mesh
from core.renderer import collect_draw_list
from world.context import SceneContext, populate_world


@pytest.fixture(scope="module")
def ctx():
    return populate_world(SceneContext.seeded(2024))


def test_populated_counts(ctx):
    root = ctx.root
    assert len(root.find("clouds").children) == 15
    assert len(root.find("trees").children) == 14
    assert len(root.find("mushrooms").children) == 20
    assert len(root.find("altars").children) == 5
    assert len(ctx.altars) == 5
    assert root.find("temple") is not None
    assert root.find("ground") is not None
    assert root.find("sky") is not None


def test_animations_registered(ctx):
    floating = ctx.animator.floating
    assert len(floating) == 5
    assert {id(f.node) for f in floating} == {id(a.crystal) for a in ctx.altars}
    assert all(f.follower is a.crystal_light for f, a in zip(floating, ctx.altars))
    assert len(ctx.animator.spinners) == 1
    assert ctx.animator.spinners[0].node is ctx.root.find("clouds")


def test_lights(ctx):
    lights = [n for n in ctx.root.traverse() if isinstance(n, Light)]
    assert len(lights) == 8
    assert sum(isinstance(n, PointLight) for n in lights) == 5

    plan = LightRig().plan(ctx.root)
    # ambient folds into the global term; sun, hemisphere and crystals get slots
    assert len(plan.bindings) == 7
    assert [b.slot for b in plan.bindings] == list(range(7))
    ambient = next(n for n in lights if isinstance(n, AmbientLight))
    hemi = next(n for n in lights if isinstance(n, HemisphereLight))
    expected = tuple(a + g * hemi.intensity * 0.5 for a, g in zip(ambient.radiance, hemi.ground_color))
    assert plan.ambient == pytest.approx(expected)


def test_point_lights_bound_in_world_space(ctx):
    plan = LightRig().plan(ctx.root)
    altar = ctx.altars[0]
    binding = next(b for b in plan.bindings if b.light is altar.crystal_light)
    p = altar.crystal_light.world_position()
    assert binding.position == pytest.approx((p.x, p.y, p.z, 1.0))
    assert binding.attenuation == pytest.approx((1.0, 0.0, 4.0 / 25.0))


def test_hidden_lights_are_skipped(ctx):
    altars = ctx.root.find("altars")
    altars.visible = False
    try:
        assert len(LightRig().plan(ctx.root).bindings) == 2
    finally:
        altars.visible = True


def test_light_limit_drops_extras():
    root = SceneContext().root
    root.add(*[PointLight(0xFFFFFF, 1.0, 5.0) for _ in range(10)])
    assert len(LightRig(max_lights=8).plan(root).bindings) == 8


def test_same_seed_same_scene():
    a = populate_world(SceneContext.seeded(7))
    b = populate_world(SceneContext.seeded(7))
    assert [x.crystal_color for x in a.altars] == [x.crystal_color for x in b.altars]
    pos_a = [m.position for m in a.root.find("mushrooms").children]
    pos_b = [m.position for m in b.root.find("mushrooms").children]
    assert pos_a == pos_b


def test_animator_moves_crystal_and_light_together():
    ctx = populate_world(SceneContext.seeded(3))
    for _ in range(30):
        ctx.animator.tick(1 / 60)
    for altar in ctx.altars:
        assert altar.crystal.position.y == altar.crystal_light.position.y
        assert abs(altar.crystal.position.y - altar.crystal_state.base_height) <= 0.3 + 1e-9
        assert altar.crystal.rotation.y == pytest.approx(0.3)


def test_draw_list_splits_transparency(ctx):
    opaque, transparent = collect_draw_list(ctx.root, (30.0, 25.0, 30.0))
    # 75 cloud puffs, 5 crystals, 6 stained glass panes
    assert len(transparent) == 86
    assert all(item.mesh.material.is_transparent for item in transparent)
    assert not any(item.mesh.material.is_transparent for item in opaque)
    meshes = [n for n in ctx.root.traverse() if isinstance(n, Mesh)]
    assert len(opaque) + len(transparent) == len(meshes)


def test_transparent_items_sorted_far_to_near(ctx):
    eye = (30.0, 25.0, 30.0)
    _, transparent = collect_draw_list(ctx.root, eye)
    dists = [sum((p - e) ** 2 for p, e in zip(item.position, eye)) for item in transparent]
    assert dists == sorted(dists, reverse=True)


def test_invisible_subtree_not_drawn(ctx):
    clouds = ctx.root.find("clouds")
    clouds.visible = False
    try:
        _, transparent = collect_draw_list(ctx.root)
        assert len(transparent) == 11
    finally:
        clouds.visible = True


def test_unknown_shading_rejected():
    with pytest.raises(ValueError):
        Material(shading="toon")


def test_material_factories():
    assert basic_material(0xFF0000).shading == "basic"
    assert basic_material(0xFF0000).color == (1.0, 0.0, 0.0)
    assert lambert_material(0x00FF00).shading == "lambert"
    glass = phong_material(0x0000FF, shininess=50, transparent=True, opacity=0.7)
    assert glass.shading == "phong"
    assert glass.shininess == 50
    assert glass.is_transparent


def test_only_back_side_materials_cull(ctx):
    sky = ctx.root.find("sky")
    assert sky.material.shading == "basic"
    assert sky.material.back_side
    assert not sky.material.fog
    assert sky.material.cull_face == GL_FRONT
    assert lambert_material(0xFFFFFF).cull_face is None
    assert ctx.root.find("ground").material.cull_face is None
