""" Loading of chart data from the legacy ``.osu`` text format into a
    :class:`WorkingBeatmap`, the in-memory form handed to a difficulty
    calculator. Only the sections relevant to difficulty are interpreted:
    ``[General]`` for the native rule variant, ``[Difficulty]`` for the
    difficulty settings, and ``[HitObjects]`` for the objects themselves.
"""

from __future__ import annotations

import os
from typing import Dict, List, Optional


class BeatmapError(ValueError):
    """ The chart data is corrupt, or cannot be interpreted under the
        requested rule variant.
    """


# Hit object type bits, as used in the third field of a [HitObjects] line.

CIRCLE = 1 << 0
SLIDER = 1 << 1
SPINNER = 1 << 3
HOLD = 1 << 7


class HitObject:
    """ One hit object: its playfield position, its start time in
        milliseconds, its type bits, and (for sliders, spinners and holds)
        the time at which it ends.
    """

    def __init__(self, x, y, time, type, end_time=None):
        self.x = x
        self.y = y
        self.time = time
        self.type = type

        if end_time is None:
            end_time = time

        self.end_time = end_time


    def __repr__(self):
        return '<HitObject %d @ %.1f,%.1f>' % (self.time, self.x, self.y)


    @property
    def is_spinner(self):
        return bool(self.type & SPINNER)


    @property
    def is_hold(self):
        return bool(self.type & HOLD)


# end of class HitObject



class WorkingBeatmap:
    """ The working representation of a chart, bound to the rule variant
        it will be interpreted with. The *difficulty* dictionary holds the
        ``[Difficulty]`` settings, with defaults filled in for any that are
        missing from the file.
    """

    defaults = {
        'HPDrainRate': 5.0,
        'CircleSize': 5.0,
        'OverallDifficulty': 5.0,
        'ApproachRate': None,
        'SliderMultiplier': 1.4,
        'SliderTickRate': 1.0,
    }

    def __init__(self, ruleset, hit_objects, difficulty=None, mode=0, version=None, path=None):

        settings = dict(self.defaults)
        if difficulty:
            settings.update(difficulty)

        # Charts predating a separate approach rate use the overall
        # difficulty in its place.

        if settings['ApproachRate'] is None:
            settings['ApproachRate'] = settings['OverallDifficulty']

        self.ruleset = ruleset
        self.hit_objects = sorted(hit_objects, key=lambda hit_object: hit_object.time)
        self.difficulty = settings
        self.mode = mode
        self.version = version
        self.path = path

        if mode != ruleset.id and mode != 0:
            raise BeatmapError('a chart for rule variant %d cannot be converted to %s' % (mode, ruleset.short_name))


    def __len__(self):
        return len(self.hit_objects)


    @property
    def converted(self):
        """ True if the chart was authored for a different rule variant and
            is being interpreted under :attr:`ruleset`.
        """

        return self.mode != self.ruleset.id


    @classmethod
    def from_file(cls, path, ruleset):
        """ Load the chart at *path* and bind it to *ruleset*. Raises
            :class:`FileNotFoundError` (or another :class:`OSError`) if the
            file cannot be read, and :class:`BeatmapError` if its content
            is not a usable chart.
        """

        if not path:
            raise FileNotFoundError('no chart file specified')

        with open(path, 'r', encoding='utf-8-sig') as chart:
            text = chart.read()

        return cls.from_string(text, ruleset, path=os.path.abspath(path))


    @classmethod
    def from_string(cls, text, ruleset, path=None):

        sections = parse(text)
        version = sections.pop(None)

        general = _key_values(sections.get('General', ()))
        difficulty = _key_values(sections.get('Difficulty', ()))

        try:
            mode = int(general.get('Mode', 0))
        except ValueError:
            raise BeatmapError('invalid mode: ' + repr(general['Mode'])) from None

        settings = dict()
        for key, value in difficulty.items():
            try:
                settings[key] = float(value)
            except ValueError:
                raise BeatmapError('invalid %s: %r' % (key, value)) from None

        hit_objects = list()
        for line in sections.get('HitObjects', ()):
            hit_objects.append(_hit_object(line))

        return cls(ruleset, hit_objects, settings, mode, version, path)


# end of class WorkingBeatmap



def parse(text: str) -> Dict[Optional[str], object]:
    """ Split the content of an ``.osu`` file into sections. The returned
        dictionary maps each section name to its list of non-empty,
        non-comment lines; the None key holds the format version number.
    """

    lines = text.splitlines()

    version = None
    for line in lines:
        line = line.strip()
        if line == '':
            continue
        if line.startswith('osu file format v'):
            try:
                version = int(line[len('osu file format v'):])
            except ValueError:
                raise BeatmapError('invalid format header: ' + repr(line)) from None
            break
        raise BeatmapError('missing format header')

    if version is None:
        raise BeatmapError('empty chart file')

    sections = dict()
    sections[None] = version
    current = None

    for line in lines:
        line = line.strip()

        if line == '' or line.startswith('//'):
            continue

        if line.startswith('[') and line.endswith(']'):
            current = list()
            sections[line[1:-1]] = current
            continue

        if current is not None:
            current.append(line)

    return sections


def _key_values(lines):

    values = dict()

    for line in lines:
        try:
            key, value = line.split(':', 1)
        except ValueError:
            continue
        values[key.strip()] = value.strip()

    return values


def _hit_object(line) -> HitObject:

    fields = line.split(',')

    if len(fields) < 4:
        raise BeatmapError('invalid hit object: ' + repr(line))

    try:
        x = float(fields[0])
        y = float(fields[1])
        time = float(fields[2])
        type = int(fields[3])
    except ValueError:
        raise BeatmapError('invalid hit object: ' + repr(line)) from None

    end_time = None

    try:
        if type & SPINNER and len(fields) > 5:
            end_time = float(fields[5])
        elif type & HOLD and len(fields) > 5:
            end_time = float(fields[5].split(':', 1)[0])
        elif type & SLIDER and len(fields) > 7:
            # The slider's duration depends on timing points this loader
            # does not interpret; approximate with its pixel length.
            end_time = time + float(fields[7])
    except ValueError:
        raise BeatmapError('invalid hit object: ' + repr(line)) from None

    return HitObject(x, y, time, type, end_time)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
