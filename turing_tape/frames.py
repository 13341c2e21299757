"""Space-time diagrams of a Turing machine run.

Each configuration of a run becomes one row of pixels and each tape
position one column, so the picture shows how the written part of the tape
and the head move over time. Pillow does the drawing; matplotlib is only
used to locate a monospace font for captions.
"""

from typing import Optional, Sequence

try:
    from PIL import Image, ImageDraw, ImageFilter, ImageFont
    from matplotlib.font_manager import FontProperties, findfont
except ImportError as e:
    raise ImportError(
        "PIL (Pillow) and matplotlib are required for space-time diagrams. "
        "Install with: pip install pillow matplotlib"
    ) from e

from .machine import Configuration
from .tape import BLANK

BACKGROUND = (255, 255, 255)
HEAD_COLOR = (220, 40, 40)
CAPTION_COLOR = (110, 110, 110, 255)

# Colors for non-blank symbols, in order of first appearance
DEFAULT_PALETTE = [
    (255, 160, 0),
    (40, 90, 200),
    (30, 150, 80),
    (150, 60, 170),
    (90, 90, 90),
    (0, 170, 190),
]


def space_time_image(
    configurations: Sequence[Configuration],
    cell_size: int = 8,
    palette: Optional[list[tuple[int, int, int]]] = None,
) -> Image.Image:
    """Draw a run as a space-time diagram.

    Args:
        configurations: Configurations in step order, e.g. collected with
            ``Machine.run(..., on_configuration=configurations.append)``
        cell_size: Width and height of one tape cell in pixels
        palette: RGB colors for non-blank symbols; cycles when there are
            more symbols than colors

    Returns:
        RGB image, one row of cells per configuration

    Example:
        >>> from turing_tape import Machine, Action, Direction
        >>> machine = Machine(0, 1, {(0, "a"): Action(1, "b", Direction.R)})
        >>> configurations = []
        >>> _ = machine.run("a", trace=False, on_configuration=configurations.append)
        >>> space_time_image(configurations, cell_size=4).size
        (8, 8)
    """
    if not configurations:
        raise ValueError("At least one configuration is required")
    if cell_size < 1:
        raise ValueError("cell_size must be at least 1")
    palette = palette or DEFAULT_PALETTE

    leftmost = min(config.first_position for config in configurations)
    rightmost = max(
        config.first_position + len(config.cells) - 1 for config in configurations
    )
    columns = rightmost - leftmost + 1

    image = Image.new("RGB", (columns * cell_size, len(configurations) * cell_size), BACKGROUND)
    draw = ImageDraw.Draw(image)
    colors: dict[str, tuple[int, int, int]] = {}

    for row, config in enumerate(configurations):
        top = row * cell_size
        for index, symbol in enumerate(config.cells):
            left = (config.first_position + index - leftmost) * cell_size
            box = (left, top, left + cell_size - 1, top + cell_size - 1)
            if symbol != BLANK:
                if symbol not in colors:
                    colors[symbol] = palette[len(colors) % len(palette)]
                draw.rectangle(box, fill=colors[symbol])
            if index == config.head:
                if cell_size >= 3:
                    draw.rectangle(box, outline=HEAD_COLOR)
                else:
                    draw.rectangle(box, fill=HEAD_COLOR)

    return image


def resize_image(image: Image.Image, resolution: tuple[int, int]) -> Image.Image:
    """Resize to exact target dimensions with appropriate filtering.

    Small diagrams are scaled up with nearest neighbor so the cells stay
    crisp; large ones are blurred slightly and scaled down with Lanczos.
    """
    width, height = resolution

    if image.width == width and image.height == height:
        return image

    x_fraction = image.width / width
    if x_fraction < 1.0:
        return image.resize((width, height), Image.NEAREST)

    blurred = image.filter(ImageFilter.GaussianBlur(radius=1.0))
    return blurred.resize((width, height), Image.LANCZOS)


def _load_font(font_size: int):
    try:
        font_path = findfont(FontProperties(family="monospace"))
        return ImageFont.truetype(font_path, font_size)
    except (OSError, ValueError):
        # Last resort
        return ImageFont.load_default()


def create_frame(
    image: Image.Image,
    caption: str,
    step_index: int,
    resolution: tuple[int, int],
    font_size: Optional[int] = None,
) -> Image.Image:
    """Resize a diagram and write the step count and caption bottom right.

    Args:
        image: Diagram from ``space_time_image``
        caption: Text to display after the step count
        step_index: Number of steps the diagram covers
        resolution: Target (width, height) in pixels
        font_size: Font size override (auto-scaled by default based on height)

    Returns:
        RGBA image ready to save
    """
    width, height = resolution
    base = resize_image(image, resolution)

    # Compute scale factor based on 1920x1080 reference (vertical dimension)
    scale_factor = height / 1080.0

    if base.mode != "RGBA":
        base = base.convert("RGBA")

    text = f"{step_index:,} {caption}".strip()

    if font_size is None:
        font_size = max(int(50.0 * scale_factor), 8)
    font = _load_font(font_size)

    draw = ImageDraw.Draw(base)
    bbox = draw.textbbox((0, 0), text, font=font)
    text_width = bbox[2] - bbox[0]

    # Digits only, so the text does not jump when commas appear
    ref_bbox = draw.textbbox((0, 0), "0123456789", font=font)
    text_height = ref_bbox[3] - ref_bbox[1]

    horizontal_padding = int(25.0 * scale_factor)
    vertical_padding = int(10.0 * scale_factor)

    x_position = width - horizontal_padding - text_width
    y_position = height - vertical_padding - text_height - int(10.0 * scale_factor)

    draw.text((x_position, y_position), text, font=font, fill=CAPTION_COLOR)

    return base
