"""
Settings for bond detection runs.

Holds the tunable options of a bond search (tolerance, margin, partition
size floor and radius overrides), validates them before any work starts,
and reads them from YAML files.

Example YAML file:

    tolerance: 1.15
    min_atoms: 32
    radii:
      Fe: 1.24
"""

import copy
import logging
import math
import numbers
from collections.abc import Mapping

import yaml

from bondfind.io.molecules import DEFAULT_TOLERANCE
from bondfind.io.yaml import YAMLFile
from bondfind.utils.periodictable import DEFAULT_RADIUS

logger = logging.getLogger(__name__)

# Partition size floor below which atoms are scanned pairwise
DEFAULT_MIN_ATOMS = 20


class InvalidSettingsError(ValueError):
    """
    Exception raised when bond detection settings are out of range.

    Raised before any partitioning begins so that a bad option never
    silently produces too few or too many bonds.
    """

    pass


class BondFindSettings:
    """
    Options for a single bond detection run.

    Attributes:
        tolerance (float): Multiplicative slack applied to the sum of
            covalent radii.
        margin (float | None): Width of the buffer used to stitch
            partitions together. None estimates it from the elements
            present in the molecule.
        min_atoms (int): Partition size below which atoms are scanned
            pairwise. Values below 2 are raised to 2.
        default_radius (float): Radius for elements missing from the
            covalent radius table.
        radii (Mapping | None): Per-element radius overrides, stored as
            given and checked by `validate`.
        brute_force (bool): Skip partitioning and scan all pairs.
    """

    def __init__(
        self,
        tolerance=DEFAULT_TOLERANCE,
        margin=None,
        min_atoms=DEFAULT_MIN_ATOMS,
        default_radius=DEFAULT_RADIUS,
        radii=None,
        brute_force=False,
    ):
        self.tolerance = tolerance
        self.margin = margin
        self.min_atoms = min_atoms
        self.default_radius = default_radius
        self.radii = radii
        self.brute_force = brute_force

    def __repr__(self):
        return (
            f"{self.__class__.__name__}(tolerance={self.tolerance}, "
            f"margin={self.margin}, min_atoms={self.min_atoms}, "
            f"default_radius={self.default_radius}, radii={self.radii}, "
            f"brute_force={self.brute_force})"
        )

    def __eq__(self, other):
        if not isinstance(other, BondFindSettings):
            return NotImplemented
        return self.__dict__ == other.__dict__

    @property
    def partition_floor(self):
        """Smallest partition size that may still be split."""
        return max(self.min_atoms, 2)

    def validate(self):
        """
        Check every option and raise on the first invalid one.

        Raises:
            InvalidSettingsError: If any option is out of range.
        """
        if not _is_positive_number(self.tolerance):
            raise InvalidSettingsError(
                f"Tolerance must be a positive number, got {self.tolerance!r}."
            )
        if (
            isinstance(self.min_atoms, bool)
            or not isinstance(self.min_atoms, numbers.Integral)
            or self.min_atoms < 1
        ):
            raise InvalidSettingsError(
                f"min_atoms must be a positive integer, got {self.min_atoms!r}."
            )
        if self.margin is not None and not (
            _is_finite_number(self.margin) and self.margin >= 0
        ):
            raise InvalidSettingsError(
                f"Margin must be a non-negative number, got {self.margin!r}."
            )
        if not _is_positive_number(self.default_radius):
            raise InvalidSettingsError(
                f"Default radius must be a positive number, "
                f"got {self.default_radius!r}."
            )
        if self.radii is not None and not isinstance(self.radii, Mapping):
            raise InvalidSettingsError(
                f"Radii must map element symbols to radii, got {self.radii!r}."
            )
        for symbol, radius in (self.radii or {}).items():
            if not _is_positive_number(radius):
                raise InvalidSettingsError(
                    f"Radius for {symbol} must be a positive number, "
                    f"got {radius!r}."
                )
        return self

    def copy(self):
        return copy.deepcopy(self)

    def merge(self, other, merge_all=False):
        """
        Return a copy of these settings updated from another source.

        Args:
            other (dict | BondFindSettings): Values to apply. Entries set
                to None are skipped unless `merge_all` is True, so that
                unset command line options keep file or default values.
            merge_all (bool): Also apply None values.

        Returns:
            BondFindSettings: New, merged settings.
        """
        if isinstance(other, BondFindSettings):
            other = other.__dict__
        merged = self.copy()
        for key, value in other.items():
            if key not in merged.__dict__:
                raise InvalidSettingsError(f"Unknown bond setting: {key}")
            if value is None and not merge_all:
                continue
            setattr(merged, key, copy.deepcopy(value))
        return merged

    @classmethod
    def default(cls):
        return cls()

    @classmethod
    def from_dict(cls, settings_dict):
        """
        Create settings from a dictionary, ignoring unknown keys.

        Unknown keys are reported as warnings so that typos in settings
        files do not pass unnoticed.
        """
        known = {}
        for key, value in settings_dict.items():
            if key in cls.default().__dict__:
                known[key] = value
            else:
                logger.warning(f"Ignoring unknown bond setting: {key}")
        return cls(**known)

    @classmethod
    def from_yaml(cls, filename):
        """
        Read settings from a YAML file holding a mapping of options.

        Raises:
            FileNotFoundError: If the file does not exist.
            InvalidSettingsError: If the file is not valid YAML or its
                root is not a mapping.
        """
        try:
            contents = YAMLFile(filename=filename).yaml_contents_dict
        except yaml.YAMLError as e:
            raise InvalidSettingsError(
                f"Could not parse YAML file {filename}: {e}"
            ) from e
        if contents is None:
            contents = {}
        if not isinstance(contents, dict):
            raise InvalidSettingsError(
                f"YAML file {filename} must contain a mapping at the root."
            )
        logger.debug(f"Read bond settings from {filename}: {contents}")
        return cls.from_dict(contents)


def _is_finite_number(value):
    return (
        isinstance(value, numbers.Real)
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


def _is_positive_number(value):
    return _is_finite_number(value) and value > 0
