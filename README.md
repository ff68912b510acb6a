# sceneforge

sceneforge is a small framework for game objects. It keeps track of objects, works out
their transforms, animates keyframed models and parses sound data. A drawing and audio
layer is meant to sit on top of it.

## Modules

- `sceneforge.objects`: `ObjectRegistry` keeps `GameObject` instances in one ordered list
  per priority layer (six by default). `update_all`, `draw_all` and `release_all` walk
  every layer from priority 0 upwards. Calling `release()` only sets an object's `dead`
  flag, and `purge_dead` removes flagged objects afterwards, so an object can release
  itself during a pass. `update_all` and `release_all` purge after the pass, `draw_all`
  before it. `register` and `detach` add and remove objects by hand, `objects(priority)`
  lists one layer, and iterating the registry yields every object. `ObjectType` tags each
  object with its kind.
- `sceneforge.entity`: the immutable `Vector3` type (`+`, `-`, `*` by a number,
  `length()`), and 4×4 matrix helpers for row vectors: `identity_matrix`, `multiply`,
  `scaling_matrix`, `translation_matrix`, `rotation_yaw_pitch_roll` and `world_matrix`
  (scale, then rotate, then translate). `spheres_collide` tests whether two spheres
  overlap. `GameEntity` is a `GameObject` with `pos`, `pos_old`, `move`, `rot`, `scale`,
  `radius` and `mtx_world`. `compute_world()` rebuilds its world matrix.
- `sceneforge.textures`: `TextureRegistry` calls a loader you supply and gives out a
  stable slot index for each texture name. A name that is already loaded gets its
  existing slot back. When every slot holds another name, `register` returns 0. A slot
  whose load returned `None` counts as free. `get(index)`, `unload()` and `len()`
  complete the interface.
- `sceneforge.sprite2d`: `Sprite2D` is a screen-space quad of four `Vertex2D` corners.
  `set_size` sets its half extents. `animate` steps through a sprite sheet, advancing
  one frame every five calls. `set_tex_size` shows a window of the texture. `draw()`
  returns the bound texture and the vertex strip.
- `sceneforge.polygon3d`: `Polygon3D` is a world-space quad of four `Vertex3D` corners
  sized by its `size` vector. `draw()` returns the world matrix, the texture and the
  vertices.
- `sceneforge.meshobject`: `MeshObject` holds the vertices bound with `bind_model`,
  together with one `Material` and one texture per subset. `compute_size` widens a
  floored, scaled bounding box (`vtx_min`, `vtx_max`) and stores its `size`. `draw()`
  returns `(material, texture)` pairs.
- `sceneforge.motion`: keyframe animation. `parse_motion_script` reads a motion script
  into a `MotionScript`, which holds model file names, `ModelPart` specs and `Motion`s.
  Each `Motion` is made of `KeySet`s of `Key`s. `MotionModel.apply_script` (or
  `load_file`, which does nothing when the file is missing) builds the parts and fills
  the motion table. Each `update()` blends every part's rotation linearly toward the
  current key set. Parts without a parent also have their position blended. A motion
  that does not loop falls back to `MotionType.NEUTRAL` when it ends.
- `sceneforge.sound`: `find_chunk` and `read_wave` parse RIFF/WAVE data held in memory
  into `WaveData`, which exposes the format fields and the sample bytes. A bad file
  raises `WaveError`. `SoundBank` reads one file per `SoundLabel` from a table of
  `SoundInfo` entries relative to a root directory. It can be used as a context manager.
  `play`, `stop`, `stop_all` and `close` manage the queue and playing state of each
  `Voice`.

## Motion scripts

A script is a sequence of `KEYWORD = values` lines. `#` starts a comment, and reading
stops at `END_SCRIPT`:

```
NUM_MODEL = 1
MODEL_FILENAME = body.x

PARTSSET
    INDEX = 0
    PARENT = -1
    POS = 0.0 10.0 0.0
    ROT = 0.0 0.0 0.0
END_PARTSSET

MOTIONSET
    LOOP = 1
    NUM_KEY = 1
    KEYSET
        FRAME = 10
        KEY
            POS = 0.0 0.0 0.0
            ROT = 0.0 1.0 0.0
        END_KEY
    END_KEYSET
END_MOTIONSET
END_SCRIPT
```

```python
from sceneforge.objects import ObjectRegistry
from sceneforge.motion import MotionModel, parse_motion_script

registry = ObjectRegistry()
model = MotionModel(registry)
model.apply_script(parse_motion_script(open("player.txt").read()))
model.init()
registry.update_all()   # parts move one step toward the first key set
```

## Example

```python
from sceneforge.objects import ObjectRegistry
from sceneforge.entity import GameEntity, Vector3

registry = ObjectRegistry(6)

class Mover(GameEntity):
    def update(self):
        self.pos = self.pos + self.move

mover = Mover(registry, 5)
mover.move = Vector3(1.0, 0.0, 0.0)
registry.update_all()
print(mover.pos)        # Vector3(x=1.0, y=0.0, z=0.0)
```

## What it does not do

sceneforge has no renderer and no audio output. The `draw()` methods return data for a
drawing layer to use, and a `Voice` only records what is queued and whether it is
playing. It does not read input, manage windows or scenes, or load image and mesh files.
Textures come from the loader you pass to `TextureRegistry`, and mesh data is whatever
you pass to `MeshObject.bind_model`.

## Testing

```
pip install -e .[test]
pytest
```