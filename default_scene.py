from SceneDef import DefaultScene
from cli import render


def main():
    example = DefaultScene()
    render(example.camera, example.scene, example.lights)


if __name__ == '__main__':
    main()
