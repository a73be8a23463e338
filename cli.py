from SceneDef import SceneDef

WIDTH = 1024
HEIGHT = 768
OUTPUT_PATH = "out.ppm"


def render(camera, scene, lights, output_path=OUTPUT_PATH, output_shape=None, verbose=True):
    """Render to output_path and exit the process if the file can't be written."""
    if output_shape is None:
        output_shape = [HEIGHT, WIDTH]
    scene_def = SceneDef(camera=camera, scene=scene, lights=lights)
    try:
        scene_def.render(output_path=output_path, output_shape=output_shape, verbose=verbose)
    except (OSError, ValueError) as e:
        raise SystemExit(f"couldn't write to {output_path}: {e}")
    print(f"successfully wrote to {output_path}")
