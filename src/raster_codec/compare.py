"""
Comparison utilities for raster-codec

Used to check encode/decode round trips: compares two PixelImages, or two
Rasters (metadata first, then their decoded images).
"""

import logging

import numpy as np
from rich.console import Console
from rich.table import Table

from .errors import RasterError
from .image import PixelImage
from .raster import Raster, metadata_summary

console = Console()
logger = logging.getLogger("raster_codec.compare")


def compare_images(image1: PixelImage, image2: PixelImage, show_channels: bool = True) -> dict:
    """
    Compare two images and return comparison statistics

    Args:
        image1: First image
        image2: Second image
        show_channels: Whether to include per-channel statistics

    Returns:
        Dictionary with comparison results
    """
    data1 = image1.data
    data2 = image2.data

    results = {
        "kind_match": image1.kind is image2.kind,
        "shape_match": data1.shape == data2.shape,
        "image1_kind": image1.kind.label,
        "image2_kind": image2.kind.label,
        "image1_shape": data1.shape,
        "image2_shape": data2.shape,
    }

    # If shapes match, compute detailed statistics
    if results["shape_match"]:
        a = data1.astype(np.float64)
        b = data2.astype(np.float64)
        diff = np.abs(a - b)

        results["arrays_equal"] = bool(np.array_equal(data1, data2, equal_nan=False))
        results["max_difference"] = float(np.max(diff))
        results["mean_difference"] = float(np.mean(diff))
        results["rmse"] = float(np.sqrt(np.mean((a - b) ** 2)))

        if show_channels:
            results["channels"] = []
            for i in range(data1.shape[2]):
                results["channels"].append(
                    {
                        "channel": i,
                        "equal": bool(np.array_equal(data1[..., i], data2[..., i])),
                        "max_diff": float(np.max(diff[..., i])),
                        "mean_diff": float(np.mean(diff[..., i])),
                        "image1_range": [float(a[..., i].min()), float(a[..., i].max())],
                        "image2_range": [float(b[..., i].min()), float(b[..., i].max())],
                    }
                )

    logger.debug(
        f"Compared {image1!r} and {image2!r}: equal={results.get('arrays_equal', False)}"
    )
    return results


def compare_rasters(raster1: Raster, raster2: Raster) -> dict:
    """
    Compare two rasters field by field, then their decoded images

    Images are only compared when both rasters decode; a decode failure is
    recorded under ``decode_error`` rather than raised.
    """
    meta1 = metadata_summary(raster1)
    meta2 = metadata_summary(raster2)

    results = {
        "metadata": {key: (meta1[key], meta2[key], meta1[key] == meta2[key]) for key in meta1},
        "buffers_equal": raster1.buffer == raster2.buffer,
    }

    try:
        image1 = raster1.to_image()
        image2 = raster2.to_image()
    except RasterError as e:
        logger.warning(f"Cannot compare decoded images: {e}")
        results["decode_error"] = str(e)
        return results

    results["image"] = compare_images(image1, image2)
    return results


def display_comparison_table(results: dict):
    """Display compare_images or compare_rasters results as tables"""

    if "metadata" in results:
        meta_table = Table(title="Raster Metadata", show_header=True)
        meta_table.add_column("Property", style="cyan")
        meta_table.add_column("Raster 1", style="green")
        meta_table.add_column("Raster 2", style="yellow")
        meta_table.add_column("Match", style="bold")

        for key, (value1, value2, match) in results["metadata"].items():
            meta_table.add_row(key, str(value1), str(value2), "YES" if match else "NO")
        meta_table.add_row(
            "buffer", "", "", "YES" if results["buffers_equal"] else "NO"
        )
        console.print(meta_table)

        if "decode_error" in results:
            console.print(f"[red]Cannot compare images: {results['decode_error']}[/red]")
            return
        results = results["image"]

    table = Table(title="Image Comparison Results", show_header=True)
    table.add_column("Property", style="cyan")
    table.add_column("Image 1", style="green")
    table.add_column("Image 2", style="yellow")
    table.add_column("Match", style="bold")

    table.add_row(
        "Kind",
        results["image1_kind"],
        results["image2_kind"],
        "YES" if results["kind_match"] else "NO",
    )
    table.add_row(
        "Shape",
        str(results["image1_shape"]),
        str(results["image2_shape"]),
        "YES" if results["shape_match"] else "NO",
    )
    console.print(table)

    if not results["shape_match"]:
        console.print("[red]Cannot compute detailed statistics - shapes don't match![/red]")
        return

    stats_table = Table(title="Statistical Comparison", show_header=True)
    stats_table.add_column("Metric", style="cyan")
    stats_table.add_column("Value", style="bold")

    stats_table.add_row("Arrays Equal", "YES" if results["arrays_equal"] else "NO")
    stats_table.add_row("Max Difference", f"{results['max_difference']:.6f}")
    stats_table.add_row("Mean Difference", f"{results['mean_difference']:.6f}")
    stats_table.add_row("RMSE", f"{results['rmse']:.6f}")
    console.print(stats_table)

    if "channels" in results:
        channel_table = Table(title="Per-Channel Statistics", show_header=True)
        channel_table.add_column("Channel", style="cyan")
        channel_table.add_column("Equal", style="bold")
        channel_table.add_column("Max Diff", style="yellow")
        channel_table.add_column("Mean Diff", style="yellow")
        channel_table.add_column("Image 1 Range", style="green")
        channel_table.add_column("Image 2 Range", style="blue")

        for channel in results["channels"]:
            channel_table.add_row(
                str(channel["channel"]),
                "YES" if channel["equal"] else "NO",
                f"{channel['max_diff']:.3f}",
                f"{channel['mean_diff']:.6f}",
                f"[{channel['image1_range'][0]:.1f}, {channel['image1_range'][1]:.1f}]",
                f"[{channel['image2_range'][0]:.1f}, {channel['image2_range'][1]:.1f}]",
            )

        console.print(channel_table)
