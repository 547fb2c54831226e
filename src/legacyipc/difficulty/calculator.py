""" Strain-based difficulty calculation. Each rule variant supplies a
    :class:`DifficultyCalculator` subclass that decides how much strain a
    single hit object adds; the shared machinery here accumulates that
    strain over time, takes the peak strain of each section of the chart,
    and combines the peaks into a star rating.
"""

from __future__ import annotations

import math
from typing import Iterable, List, Sequence

from . import mods as modmodule


class DifficultyAttributes:
    """ The result of a difficulty calculation. *star_rating* is never
        negative; *max_combo* is the number of hit objects considered.
    """

    def __init__(self, star_rating, mods=(), max_combo=0):
        self.star_rating = star_rating
        self.mods = tuple(mods)
        self.max_combo = max_combo


    def __repr__(self):
        acronyms = ''.join(mod.acronym for mod in self.mods)
        return '<DifficultyAttributes %.4f stars %s>' % (self.star_rating, acronyms or 'NM')


# end of class DifficultyAttributes



class DifficultyCalculator:
    """ Compute the difficulty of a :class:`WorkingBeatmap` for the rule
        variant it is bound to. Subclasses override :func:`strain_value`
        and, where needed, the class attributes tuning the accumulation.

        :ivar section_length: Length, in milliseconds, of a strain section.
        :ivar decay_base: Fraction of strain remaining after one second.
        :ivar decay_weight: Weight applied to each successive section peak.
        :ivar star_scaling: Final scale from combined strain to stars.
    """

    section_length = 400.0
    decay_base = 0.15
    decay_weight = 0.9
    star_scaling = 0.2

    # Objects closer together than this, in milliseconds, are treated as
    # being exactly this far apart.

    minimum_delta = 25.0

    def __init__(self, ruleset, beatmap):
        self.ruleset = ruleset
        self.beatmap = beatmap


    def calculate(self, mods: Iterable = ()) -> DifficultyAttributes:

        mods = tuple(mods)
        objects = self.beatmap.hit_objects

        if len(objects) < 2:
            return DifficultyAttributes(0.0, mods, len(objects))

        rate = modmodule.clock_rate(mods)
        settings = self.adjust_settings(self.beatmap.difficulty, mods)

        peaks = self.section_peaks(objects, rate, settings, mods)
        combined = self.combine(peaks)

        star_rating = math.sqrt(combined) * self.star_scaling

        if math.isfinite(star_rating) == False or star_rating < 0:
            raise ArithmeticError('calculated star rating is out of range: ' + repr(star_rating))

        return DifficultyAttributes(star_rating, mods, len(objects))


    def adjust_settings(self, difficulty, mods):
        """ Return a copy of the *difficulty* settings with the effects of
            the *mods* applied. Settings other than the circle size are
            capped at 10.
        """

        settings = dict(difficulty)

        for mod in mods:
            for key in ('HPDrainRate', 'OverallDifficulty', 'ApproachRate'):
                settings[key] = min(settings[key] * mod.setting_scale, 10.0)

            settings['CircleSize'] = min(settings['CircleSize'] * mod.circle_size_scale, 10.0)

        return settings


    def section_peaks(self, objects, rate, settings, mods) -> List[float]:
        """ Walk the hit objects in order, accumulating strain, and return
            the peak strain observed in each section of the chart.
        """

        section_length = self.section_length
        peaks = list()

        strain = 0.0
        section_end = math.ceil(objects[0].time / rate / section_length) * section_length
        peak = 0.0

        previous = None
        for current in objects:
            time = current.time / rate

            while time > section_end:
                peaks.append(peak)
                peak = strain * self.decay(section_end - previous.time / rate) if previous else 0.0
                section_end += section_length

            if previous is None:
                previous = current
                continue

            delta = max((current.time - previous.time) / rate, self.minimum_delta)

            strain *= self.decay(delta)
            strain += self.strain_value(current, previous, delta, settings, mods)

            peak = max(peak, strain)
            previous = current

        peaks.append(peak)
        return peaks


    def decay(self, milliseconds):
        return self.decay_base ** (milliseconds / 1000.0)


    def combine(self, peaks: Sequence[float]) -> float:
        """ Weighted sum of the section peaks, hardest section first.
        """

        total = 0.0
        weight = 1.0

        for peak in sorted(peaks, reverse=True):
            if peak <= 0:
                break
            total += peak * weight
            weight *= self.decay_weight

        return total


    def strain_value(self, current, previous, delta, settings, mods) -> float:
        """ The strain added by *current*, which follows *previous* after
            *delta* milliseconds of (rate-adjusted) time.
        """

        return 1000.0 / delta


# end of class DifficultyCalculator



class OsuDifficultyCalculator(DifficultyCalculator):
    """ Aim and speed combined: strain grows with the distance travelled
        between objects, measured in circle diameters.
    """

    def strain_value(self, current, previous, delta, settings, mods):

        radius = max(54.4 - 4.48 * settings['CircleSize'], 1.0)
        distance = math.hypot(current.x - previous.x, current.y - previous.y)
        jump = distance / (2 * radius)

        if previous.is_spinner:
            jump = 0.0

        return (1.0 + jump) * 1000.0 / delta


class TaikoDifficultyCalculator(DifficultyCalculator):
    """ Rhythm density, with a bonus for changes of rhythm.
    """

    minimum_delta = 50.0

    def section_peaks(self, objects, rate, settings, mods):
        self._previous_delta = None
        return DifficultyCalculator.section_peaks(self, objects, rate, settings, mods)


    def strain_value(self, current, previous, delta, settings, mods):

        change = 0.0
        if self._previous_delta:
            change = min(abs(math.log2(delta / self._previous_delta)), 2.0)

        self._previous_delta = delta
        return (1.0 + 0.5 * change) * 1000.0 / delta


class CatchDifficultyCalculator(DifficultyCalculator):
    """ Horizontal movement of the catcher, measured in catcher widths.
    """

    minimum_delta = 50.0

    def strain_value(self, current, previous, delta, settings, mods):

        width = 106.75 * (1.0 - 0.7 * (settings['CircleSize'] - 5.0) / 5.0)
        width = max(width, 10.0)
        movement = abs(current.x - previous.x) / width

        return (1.0 + movement) * 1000.0 / delta


class ManiaDifficultyCalculator(DifficultyCalculator):
    """ Overall note density plus per-column density, so that jacks (repeat
        notes in one column) rate harder than the same notes spread out.
    """

    minimum_delta = 30.0

    def key_count(self, settings, mods):

        keys = modmodule.key_count(mods)
        if keys is not None:
            return keys

        if self.beatmap.converted:
            return 7

        # Key count is a property of the chart; mods that scale the circle
        # size do not change it.

        circle_size = self.beatmap.difficulty['CircleSize']
        return min(max(int(round(circle_size)), 1), 18)


    def section_peaks(self, objects, rate, settings, mods):
        self._keys = self.key_count(settings, mods)
        self._column_times = dict()
        return DifficultyCalculator.section_peaks(self, objects, rate, settings, mods)


    def column(self, hit_object):
        column = int(hit_object.x * self._keys / 512.0)
        return min(max(column, 0), self._keys - 1)


    def strain_value(self, current, previous, delta, settings, mods):

        rate = modmodule.clock_rate(mods)
        column = self.column(current)

        column_value = 0.0
        last = self._column_times.get(column)
        if last is not None:
            column_delta = max((current.time - last) / rate, self.minimum_delta)
            column_value = 1000.0 / column_delta

        self._column_times[column] = current.time

        hold = 0.2 if current.is_hold else 0.0
        return (1.0 + hold) * 1000.0 / delta * 0.5 + column_value


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
