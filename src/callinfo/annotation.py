"""
metadata shared by variant and genotype calls: the error estimate, the applied filters and the
free-form attributes
"""
import enum
import math
from collections.abc import Set as AbstractSet
from types import MappingProxyType
from typing import Any, Callable, Collection, List, Mapping, MutableMapping, Optional, Set

import numpy as np

from .constants import MISSING_VALUE, NO_LOG10_PERROR
from .error import AttributeTypeError, DuplicateFilterError, InvalidArgumentError, InvalidStateError
from .util import logger

NO_ATTRIBUTES: Mapping[str, Any] = MappingProxyType({})
"""read-only empty mapping shared by every record which has no attributes"""


class AttributeStorage(enum.Enum):
    """
    holds the storage mode of the attribute mapping of a record

    Attributes:
        SHARED_EMPTY: the record points at :data:`NO_ATTRIBUTES` and must not write to it
        OWNED: the record has its own mapping
    """

    SHARED_EMPTY = 'shared_empty'
    OWNED = 'owned'


class FilterView(AbstractSet):
    """
    read-only view of the filters of a record. Filters which were not evaluated show as empty
    """

    def __init__(self, filters: Optional[Set[str]] = None):
        self._filters = filters if filters is not None else frozenset()

    def __contains__(self, item):
        return item in self._filters

    def __iter__(self):
        return iter(self._filters)

    def __len__(self):
        return len(self._filters)

    def __repr__(self):
        return '{}({})'.format(self.__class__.__name__, sorted(self._filters))


def check_log10_p_error(log10_p_error: float) -> float:
    """
    Raises:
        InvalidArgumentError: the value is NaN, infinite, or positive and not NO_LOG10_PERROR
    """
    log10_p_error = float(log10_p_error)
    if math.isnan(log10_p_error):
        raise InvalidArgumentError('log10_p_error should not be NaN')
    if math.isinf(log10_p_error):
        raise InvalidArgumentError('log10_p_error should not be infinite', log10_p_error)
    if log10_p_error > 0 and log10_p_error != NO_LOG10_PERROR:
        raise InvalidArgumentError('log10_p_error cannot be > 0', log10_p_error)
    return log10_p_error


def _parse_attribute(key: str, value: Any, cast_func: Callable, strip: bool = False):
    """
    parse a string attribute value. Digit separators ('1_000') are not numbers in the VCF encoding
    and surrounding whitespace is only allowed when strip is set
    """
    if not isinstance(value, str):
        raise AttributeTypeError(
            'attribute value cannot be converted', key, value, type(value).__name__, cast_func.__name__
        )
    if '_' in value or (not strip and value != value.strip()):
        raise AttributeTypeError('attribute value cannot be parsed', key, value, cast_func.__name__)
    try:
        return cast_func(value)
    except (TypeError, ValueError) as err:
        raise AttributeTypeError('attribute value cannot be parsed', key, value, cast_func.__name__) from err


class AnnotationRecord:
    """
    the error estimate, filters and attributes of a variant or genotype call

    Warning:
        :meth:`add_filters` and :meth:`put_attributes` are not atomic. Items before the one which
        raised the error stay applied
    """

    def __init__(
        self,
        name: Optional[str] = None,
        log10_p_error: float = NO_LOG10_PERROR,
        filters: Optional[Set[str]] = None,
        attributes: Optional[MutableMapping[str, Any]] = None,
    ):
        """
        Args:
            name: name of the record (ex. the variant ID or the sample name)
            log10_p_error: log10 of the probability that the call is wrong, NO_LOG10_PERROR if unknown
            filters: None if the filters were not evaluated, otherwise the names of the failed filters
            attributes: the attribute mapping. A mutable mapping is used as given, not copied. A
                read-only mapping is copied into a dict so the record can still be updated

        Raises:
            InvalidArgumentError: the log10_p_error is not valid
        """
        self._name = name
        self._log10_p_error = check_log10_p_error(log10_p_error)
        self._filters = filters
        if attributes:
            if not isinstance(attributes, MutableMapping):
                logger.debug('copying read-only attribute mapping')
                attributes = dict(attributes)
            self._attributes = attributes
            self._storage = AttributeStorage.OWNED
        else:
            self._attributes = NO_ATTRIBUTES
            self._storage = AttributeStorage.SHARED_EMPTY

    @property
    def name(self) -> Optional[str]:
        return self._name

    @name.setter
    def name(self, name: str):
        if name is None:
            raise InvalidArgumentError('name cannot be None', self)
        self._name = name

    # filters

    @property
    def filters(self) -> FilterView:
        """*FilterView*: read-only view of the filters, empty when filters were not evaluated"""
        return FilterView(self._filters)

    @property
    def filters_maybe_none(self) -> Optional[Set[str]]:
        """the filters as stored, None when filters were not evaluated"""
        return self._filters

    def filters_were_applied(self) -> bool:
        return self._filters is not None

    def is_filtered(self) -> bool:
        return self._filters is not None and len(self._filters) > 0

    def is_not_filtered(self) -> bool:
        return not self.is_filtered()

    def add_filter(self, name: str):
        """
        Raises:
            InvalidArgumentError: the filter name is None
            DuplicateFilterError: the filter has already been added
        """
        if name is None:
            raise InvalidArgumentError('attempting to add a None filter', self)
        if name in self.filters:
            raise DuplicateFilterError('attempting to add duplicate filter', name, self)
        if self._filters is None:
            self._filters = set()
        self._filters.add(name)

    def add_filters(self, names: Collection[str]):
        """
        add each filter in turn. A failure leaves the filters added before it in place

        Raises:
            InvalidArgumentError: the collection is None
            DuplicateFilterError: one of the filters has already been added
        """
        if names is None:
            raise InvalidArgumentError('attempting to add None filters', self)
        for name in names:
            self.add_filter(name)

    # error estimate

    def has_log10_p_error(self) -> bool:
        return self._log10_p_error != NO_LOG10_PERROR

    @property
    def log10_p_error(self) -> float:
        return self._log10_p_error

    @log10_p_error.setter
    def log10_p_error(self, log10_p_error: float):
        self._log10_p_error = check_log10_p_error(log10_p_error)

    @property
    def phred_scaled_qual(self) -> float:
        """
        the phred scaled quality, -10 * log10_p_error. Never returns -0.0

        Example:
            >>> AnnotationRecord(log10_p_error=-2.5).phred_scaled_qual
            25.0
        """
        # -0.0 + 0.0 == +0.0
        return self._log10_p_error * -10 + 0.0

    # attributes

    @property
    def storage(self) -> AttributeStorage:
        return self._storage

    def _own_attributes(self):
        if self._storage == AttributeStorage.SHARED_EMPTY:
            logger.debug('copying shared empty attributes to a private mapping')
            self._attributes = {}
            self._storage = AttributeStorage.OWNED

    def clear_attributes(self):
        self._attributes = {}
        self._storage = AttributeStorage.OWNED

    def set_attributes(self, attributes: Optional[Mapping[str, Any]]):
        self.clear_attributes()
        self.put_attributes(attributes)

    def put_attribute(self, key: str, value: Any, allow_overwrite: bool = False):
        """
        Raises:
            InvalidStateError: the key is already bound and allow_overwrite is False
        """
        if not allow_overwrite and self.has_attribute(key):
            raise InvalidStateError('attempting to overwrite key->value binding', key, self)
        self._own_attributes()
        self._attributes[key] = value

    def remove_attribute(self, key: str):
        self._own_attributes()
        self._attributes.pop(key, None)

    def put_attributes(self, attributes: Optional[Mapping[str, Any]]):
        """
        add all the attributes from a mapping. If this record already has attributes, each key is
        added with :meth:`put_attribute` and the first key already bound raises an error (keys added
        before it stay added)

        Raises:
            InvalidStateError: a key in the input is already bound on this record
        """
        if attributes is None:
            return
        if not self._attributes:
            self._own_attributes()
            self._attributes.update(attributes)
        else:
            for key, value in attributes.items():
                self.put_attribute(key, value, False)

    def has_attribute(self, key: str) -> bool:
        return key in self._attributes

    def __contains__(self, key):
        return self.has_attribute(key)

    @property
    def num_attributes(self) -> int:
        return len(self._attributes)

    @property
    def attributes(self) -> Mapping[str, Any]:
        """read-only view of the attributes"""
        return MappingProxyType(self._attributes)

    def get_attribute(self, key: str, default: Any = None) -> Any:
        if key in self._attributes:
            return self._attributes[key]
        return default

    def get_attribute_as_list(self, key: str) -> List:
        """
        Returns:
            an empty list if the key was not found, the value itself if it is a list, the items of
            a tuple, set or array, or else a list containing the single value

        Example:
            >>> AnnotationRecord(attributes={'AC': (1, 2)}).get_attribute_as_list('AC')
            [1, 2]
        """
        value = self._attributes.get(key)
        if value is None:
            return []
        if isinstance(value, list):
            return value
        if isinstance(value, (tuple, set, frozenset, np.ndarray)):
            return list(value)
        return [value]

    def get_attribute_as_string(self, key: str, default: Optional[str] = None) -> Optional[str]:
        value = self._attributes.get(key)
        if value is None:
            return default
        if isinstance(value, str):
            return value
        return str(value)

    def get_attribute_as_int(self, key: str, default: int) -> int:
        """
        Returns:
            the default if the key is not found or holds the missing value token, otherwise the value as an int

        Raises:
            AttributeTypeError: the value is neither an integer nor a string which can be parsed as one
        """
        value = self._attributes.get(key)
        if value is None or (isinstance(value, str) and value == MISSING_VALUE):
            return default
        if isinstance(value, (int, np.integer)) and not isinstance(value, bool):
            return int(value)
        return _parse_attribute(key, value, int)

    def get_attribute_as_float(self, key: str, default: float) -> float:
        """
        Raises:
            AttributeTypeError: the value is neither a number nor a string which can be parsed as one
        """
        value = self._attributes.get(key)
        if value is None:
            return default
        if isinstance(value, (float, int, np.floating, np.integer)) and not isinstance(value, bool):
            return float(value)
        return _parse_attribute(key, value, float, strip=True)

    def get_attribute_as_boolean(self, key: str, default: bool) -> bool:
        """
        Returns:
            the default if the key is not found, the value if it is a boolean, and for a string
            True only when it is 'true' (any case)

        Raises:
            AttributeTypeError: the value is neither a boolean nor a string

        Example:
            >>> AnnotationRecord(attributes={'DB': 'yes'}).get_attribute_as_boolean('DB', True)
            False
        """
        value = self._attributes.get(key)
        if value is None:
            return default
        if isinstance(value, (bool, np.bool_)):
            return bool(value)
        if isinstance(value, str):
            return value.lower() == 'true'
        raise AttributeTypeError('attribute value cannot be converted', key, value, type(value).__name__, 'bool')

    def __eq__(self, other):
        if not isinstance(other, AnnotationRecord):
            return False
        return (
            self.name == other.name
            and self.log10_p_error == other.log10_p_error
            and self.filters_maybe_none == other.filters_maybe_none
            and dict(self._attributes) == dict(other._attributes)
        )

    def __repr__(self):
        return '{}(name={}, log10_p_error={}, filters={}, attributes={})'.format(
            self.__class__.__name__,
            repr(self._name),
            self._log10_p_error,
            None if self._filters is None else sorted(self._filters),
            dict(self._attributes),
        )
