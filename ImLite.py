from PIL import Image as PIM
import numpy as np
import matplotlib.pyplot as plt


class Image(object):
    """Image

    A float RGB framebuffer of shape (height, width, 3) plus the conversions
    needed to get it into an 8-bit file.
    """

    MAXVAL = 255;

    def __init__(self, pixels):
        self.pixels = np.asarray(pixels);

    @property
    def dtype(self):
        return self.pixels.dtype;

    @property
    def _is_float(self):
        return (self.dtype.kind in 'f');

    @property
    def shape(self):
        return np.asarray(self.pixels.shape)[:];

    @property
    def width(self):
        return int(self.shape[1]);

    @property
    def height(self):
        return int(self.shape[0]);

    def tone_mapped(self):
        """Rescale every pixel by 1/max(1, r, g, b).

        The three channels of a pixel are scaled together, so a pixel with a
        channel above 1 keeps its hue instead of being clipped per channel.
        """
        fpix = self.pixels.astype(np.float64);
        peak = np.maximum(1.0, np.max(fpix, axis=2, keepdims=True));
        return Image(pixels=fpix / peak);

    @property
    def ipixels(self):
        """uint8 pixels: round(clip(tone_mapped, 0, 1) * 255)."""
        if (not self._is_float):
            return self.pixels.astype(np.uint8);
        tm = self.tone_mapped().pixels;
        return np.round(np.clip(tm, 0.0, 1.0) * self.MAXVAL).astype(np.uint8);

    def PIL(self):
        return PIM.fromarray(self.ipixels);

    def ppmBytes(self):
        """The image as a binary (P6) PPM file."""
        header = b"P6\n%d %d\n%d\n" % (self.width, self.height, self.MAXVAL);
        return header + np.ascontiguousarray(self.ipixels).tobytes();

    def writeToFile(self, output_path, **kwargs):
        """Write the image; .ppm gets a P6 file, anything else goes through Pillow.

        Raises OSError when the file can't be written and ValueError when
        Pillow can't tell the format from the extension.
        """
        if (str(output_path).lower().endswith('.ppm')):
            with open(output_path, 'wb') as f:
                f.write(self.ppmBytes());
        else:
            self.PIL().save(output_path, **kwargs);

    def show(self, title=None, new_figure=True, axis=None, **kwargs):
        return Image.Show(self, title=title, new_figure=new_figure, axis=axis, **kwargs);

    @staticmethod
    def Show(im, title=None, new_figure=True, axis=None, **kwargs):
        if (isinstance(im, Image)):
            imdata = im.ipixels;
        else:
            imdata = Image(pixels=im).ipixels;

        if (axis is None):
            if (new_figure):
                if (title is not None):
                    plt.figure(num=title);
                else:
                    plt.figure();
            axis = plt.gca();
        axis.imshow(imdata, **kwargs);
        axis.axis('off');
        if (title):
            axis.set_title(title);
        return axis;
