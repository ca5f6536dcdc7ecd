# This file is part of the MapStitch project.
# Copyright (C) 2026 The MapStitch Authors
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#    http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Label and marker overlays for static maps.
"""
from PIL import Image, ImageColor, ImageDraw, ImageFont

from mapstitch.image import ImageSource

import logging
log_system = logging.getLogger('mapstitch.system')


class StaticMapOverlay(object):
    """
    Draws the label (lower right) and a marker for the center
    coordinate on top of a static map.

    Both are drawn on a transparent layer that is composited over
    the map, so the map stays visible below the label box.
    """
    def __init__(self, marker=True, font_file=None, font_size=12):
        self.marker = marker
        self.font_file = font_file
        self.font_size = font_size

    def draw(self, img, label):
        """
        :param img: the static map
        :type img: `ImageSource`
        :rtype: `ImageSource`
        """
        if not label and not self.marker:
            return img

        base_img = img.as_image()
        size = base_img.size
        if not size[0] or not size[1]:
            return img

        layer = Image.new('RGBA', size, (255, 255, 255, 0))
        draw = ImageDraw.Draw(layer)
        if label:
            LabelImage(label, font_file=self.font_file, font_size=self.font_size).draw_msg(draw, size)
        if self.marker:
            MarkerImage().draw_marker(draw, size)

        if base_img.mode != 'RGBA':
            base_img = base_img.convert('RGBA')
        result = Image.alpha_composite(base_img, layer)
        return ImageSource(result, size=size, image_opts=img.image_opts)


class MessageImage(object):
    """
    Base class for text rendering in images.

    :ivar font_color: the color of the font as a tuple
    :ivar box_color: the color of the box behind the text.
                     color as a tuple or ``None``
    """
    font_size = 12
    font_color = ImageColor.getrgb('black')
    box_color = None
    linespacing = 3
    padding = 6
    placement = 'ul'

    def __init__(self, message, font_file=None, font_size=None):
        self.message = message
        self.font_file = font_file
        if font_size:
            self.font_size = font_size
        self._font = None

    @property
    def font(self):
        if self._font is None:
            if self.font_file:
                try:
                    self._font = ImageFont.truetype(self.font_file, self.font_size)
                except (OSError, ImportError) as ex:
                    log_system.warning("Couldn't load font %s (%s), using default font.",
                        self.font_file, ex)
            if self._font is None:
                self._font = ImageFont.load_default()
        return self._font

    def draw_msg(self, draw, size):
        td = TextDraw(self.message, font=self.font, bg_color=self.box_color,
                      font_color=self.font_color, placement=self.placement,
                      linespacing=self.linespacing, padding=self.padding)
        td.draw(draw, size)


class LabelImage(MessageImage):
    """
    Attribution label in the lower right corner.
    """
    placement = 'lr'
    box_color = (255, 255, 255, 196)
    font_color = (0, 0, 0, 255)


class MarkerImage(object):
    """
    Round marker at the center of the image.
    """
    radius = 7
    outline_width = 2
    fill_color = (220, 30, 30, 255)
    outline_color = (255, 255, 255, 255)

    def draw_marker(self, draw, size):
        x, y = size[0] // 2, size[1] // 2
        r = self.radius
        draw.ellipse((x - r, y - r, x + r, y + r), fill=self.fill_color,
            outline=self.outline_color, width=self.outline_width)


class TextDraw(object):
    def __init__(self, text, font, font_color=None, bg_color=None,
                 placement='ul', padding=5, linespacing=3):
        if isinstance(text, str):
            text = text.split('\n')
        self.text = text
        self.font = font
        self.bg_color = bg_color
        self.font_color = font_color
        self.placement = placement
        self.padding = (padding, padding, padding, padding)
        self.linespacing = linespacing

    def text_boxes(self, draw, size):
        total_bbox, boxes = self._relative_text_boxes(draw)
        return self._place_boxes(total_bbox, boxes, size)

    def draw(self, draw, size):
        total_bbox, boxes = self.text_boxes(draw, size)
        if self.bg_color:
            draw.rectangle(
                (total_bbox[0]-self.padding[0],
                 total_bbox[1]-self.padding[1],
                 total_bbox[2]+self.padding[2],
                 total_bbox[3]+self.padding[3]),
                fill=self.bg_color)

        for text, box in zip(self.text, boxes):
            draw.text((box[0], box[1]), text, font=self.font, fill=self.font_color)

    def _relative_text_boxes(self, draw):
        total_bbox = (1e9, 1e9, -1e9, -1e9)
        boxes = []
        y_offset = 0
        for line in self.text:
            left, top, right, bottom = draw.textbbox((0, 0), line, font=self.font)
            text_box = (0, y_offset, right, bottom + y_offset)
            boxes.append(text_box)
            total_bbox = (min(total_bbox[0], text_box[0]),
                          min(total_bbox[1], text_box[1]),
                          max(total_bbox[2], text_box[2]),
                          max(total_bbox[3], text_box[3]),
                         )
            y_offset += bottom + self.linespacing
        return total_bbox, boxes

    def _move_bboxes(self, boxes, offsets):
        result = []
        for box in boxes:
            box = box[0]+offsets[0], box[1]+offsets[1], box[2]+offsets[0], box[3]+offsets[1]
            result.append(tuple(int(x) for x in box))
        return result

    def _place_boxes(self, total_bbox, boxes, size):
        x_offset = y_offset = None
        text_size = (total_bbox[2] - total_bbox[0]), (total_bbox[3] - total_bbox[1])

        if self.placement[0] == 'u':
            y_offset = self.padding[1]
        elif self.placement[0] == 'l':
            y_offset = size[1] - self.padding[3] - text_size[1]

        if self.placement[1] == 'l':
            x_offset = self.padding[0]
        elif self.placement[1] == 'r':
            x_offset = size[0] - self.padding[2] - text_size[0]

        if x_offset is None or y_offset is None:
            raise ValueError('placement %r not supported' % self.placement)

        offsets = x_offset, y_offset
        return self._move_bboxes([total_bbox], offsets)[0], self._move_bboxes(boxes, offsets)
