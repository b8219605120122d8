import logging
import unittest

import torch
import numpy as np

from edgekernel.frames import SobelFrameFilter, NotNegotiated, unpack_rgbx, pack_rgba
from edgekernel.filtering.edges import sobel_edges
from edgekernel.filtering.dispatch import tile_grid
from edgekernel.utils.validation import DimensionMismatch


def random_frame(width, height, bytes_per_row=None):
    if bytes_per_row is None:
        bytes_per_row = 4 * width
    return np.random.randint(0, 256, size=(height, bytes_per_row), dtype=np.uint8).tobytes()


class FramesTestCase(unittest.TestCase):
    def test_unpack(self):
        data = bytes([0, 51, 255, 7, 255, 0, 102, 9])  # 2x1 frame
        image = unpack_rgbx(data, 2, 1, dtype=torch.float64)
        self.assertEqual(tuple(image.shape), (4, 1, 2))
        self.assertEqual(image[:, 0, 0].tolist(), [0.0, 0.2, 1.0, 7 / 255])
        self.assertEqual(image[:, 0, 1].tolist(), [1.0, 0.0, 0.4, 9 / 255])

    def test_unpack_stride(self):
        width, height = 3, 4
        data = random_frame(width, height, bytes_per_row=16)
        image = unpack_rgbx(data, width, height, bytes_per_row=16, dtype=torch.float64)
        rows = np.frombuffer(data, dtype=np.uint8).reshape(height, 16)[:, :12]
        expected = rows.reshape(height, width, 4).transpose(2, 0, 1) / 255
        self.assertLess(np.abs(image.numpy() - expected).max(), 1e-12)

    def test_pack(self):
        image = torch.tensor([0.0, 0.5, 1.5, -1.0]).reshape(4, 1, 1)
        self.assertEqual(pack_rgba(image), bytes([0, 128, 255, 0]))

    def test_pack_unpack(self):
        data = random_frame(5, 6)
        self.assertEqual(pack_rgba(unpack_rgbx(data, 5, 6)), data)

    def test_size_mismatch(self):
        with self.assertRaises(DimensionMismatch):
            unpack_rgbx(bytes(15), 2, 2)
        with self.assertRaises(DimensionMismatch):
            unpack_rgbx(bytes(16), 2, 2, bytes_per_row=4)
        with self.assertRaises(ValueError):
            pack_rgba(torch.zeros(3, 2, 2))

    def test_not_negotiated(self):
        f = SobelFrameFilter()
        with self.assertRaises(NotNegotiated):
            f.transform(random_frame(4, 4))

        f.set_info(4, 4)
        f.transform(random_frame(4, 4))
        f.reset()
        with self.assertRaises(NotNegotiated):
            f.transform(random_frame(4, 4))

    def test_transform(self):
        width, height = 13, 9
        f = SobelFrameFilter(tile_size=4, workers=2)
        with self.assertLogs("edgekernel.frames", level=logging.INFO):
            f.set_info(width, height)

        data = random_frame(width, height)
        out = np.frombuffer(f.transform(data), dtype=np.uint8).reshape(height, width, 4)

        # row 0 and column 0 keep the zero-initialized output image
        self.assertTrue(np.all(out[0, :, :] == 0))
        self.assertTrue(np.all(out[:, 0, :] == 0))
        self.assertTrue(np.all(out[1:, 1:, 3] == 255))

        src = unpack_rgbx(data, width, height)
        expected = sobel_edges(src, torch.zeros(4, height, width))
        self.assertEqual(out.tobytes(), pack_rgba(expected))

    def test_transform_deterministic(self):
        f = SobelFrameFilter()
        f.set_info(10, 10)
        data = random_frame(10, 10)
        self.assertEqual(f.transform(data), f.transform(data))

    def test_transform_stride(self):
        width, height, stride = 6, 5, 32
        f = SobelFrameFilter()
        f.set_info(width, height, bytes_per_row=stride)
        data = random_frame(width, height, bytes_per_row=stride)
        out = f.transform(data)
        self.assertEqual(len(out), 4 * width * height)

        src = unpack_rgbx(data, width, height, bytes_per_row=stride)
        self.assertEqual(out, pack_rgba(sobel_edges(src, torch.zeros(4, height, width))))

        with self.assertRaises(DimensionMismatch):
            f.transform(random_frame(width, height))
        with self.assertRaises(DimensionMismatch):
            f.set_info(width, height, bytes_per_row=4 * width - 1)

    def test_default_tiles_1080p(self):
        f = SobelFrameFilter()
        self.assertLessEqual(len(tile_grid(1080, 1920, tile_size=f.kernel.tile_size)), 64)

    def test_invalid_info(self):
        with self.assertRaises(ValueError):
            SobelFrameFilter().set_info(0, 4)
        with self.assertRaises(DimensionMismatch):
            f = SobelFrameFilter()
            f.set_info(4, 4)
            f.transform(random_frame(4, 5))


if __name__ == '__main__':
    unittest.main()
