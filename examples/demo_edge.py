import time

import numpy as np
import torch
from matplotlib import pyplot as plt
from skimage import data

from edgekernel import EdgeKernel, SobelFrameFilter


def run_kernel():
    original = data.astronaut() / 255.
    src = torch.tensor(original, dtype=torch.float32).permute(2, 0, 1)
    dst = torch.zeros(4, *src.shape[-2:])

    kernel = EdgeKernel(tile_size=64)
    start = time.perf_counter()
    kernel(src, dst)
    print(f"{tuple(src.shape)} in {time.perf_counter() - start:.4f}s")

    fig, axes = plt.subplots(1, 2, figsize=(10, 5))
    axes[0].imshow(original)
    axes[1].imshow(dst.permute(1, 2, 0).numpy())
    plt.show()


def run_frames():
    rgb = data.coffee()
    h, w = rgb.shape[:2]
    rgbx = np.concatenate([rgb, np.zeros((h, w, 1), dtype=np.uint8)], axis=-1)

    f = SobelFrameFilter(workers=4)
    f.set_info(w, h)
    out = np.frombuffer(f.transform(rgbx.tobytes()), dtype=np.uint8).reshape(h, w, 4)

    plt.imshow(out)
    plt.show()


if __name__ == '__main__':
    run_kernel()
    run_frames()
