import logging

from sonogram.config import RenderConfig
from sonogram.procs.render import render_file


def main() -> None:
    logging.basicConfig(level=logging.INFO, format='%(asctime)s %(name)s %(levelname)s %(message)s')

    path_resource: str = './resources/tawnyowl.wav'
    path_output: str = './spectrogram.png'

    config = RenderConfig(
        fft_size=2048,
        hop_size=880,
        height=512,
        workers=4
    )
    image = render_file(path_resource, path_output, config=config)

    print(f'Spectrogram size: {image.width}x{image.height}')
    print(f'Saved to {path_output}')


if __name__ == '__main__':
    main()
