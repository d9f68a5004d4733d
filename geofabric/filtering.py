"""Attribute-based filtering of features to a region of interest."""
from collections import namedtuple
import pandas as pd

FilterOutcome = namedtuple('FilterOutcome', ['matched_columns', 'kept', 'matched', 'note'])


def get_name_columns(df, candidate_columns):
    """Candidate columns that are present in df,
    in the order of ``candidate_columns``."""
    present = set(df.columns)
    return [c for c in candidate_columns if c in present]


def contains_keyword(value, keyword):
    """Case-insensitive substring test for a single attribute value.
    Null values never match."""
    if value is None:
        return False
    if pd.api.types.is_scalar(value) and pd.isna(value):
        return False
    return keyword.lower() in str(value).lower()


def filter_by_region(df, candidate_columns, region_keyword):
    """Keep features with a name attribute that mentions a region.

    Features are kept if any of the candidate name columns present
    in ``df`` contains ``region_keyword`` (case-insensitive substring
    match on the text value). If none of the candidate columns are
    present, or no features match, nothing is dropped: the input
    is returned unchanged with ``matched=False``, and ``note``
    describes why.

    Parameters
    ----------
    df : DataFrame or GeoDataFrame
    candidate_columns : sequence of str
        Attribute columns that may hold a river, catchment or place name,
        in order of preference.
    region_keyword : str
        e.g. 'Goulburn'

    Returns
    -------
    outcome : FilterOutcome
        matched_columns : list of candidate columns present in df
        kept : the filtered features (row order and index preserved),
            or df itself if nothing matched
        matched : whether the filter was applied
        note : diagnostic text when the filter wasn't applied, otherwise None
    """
    name_columns = get_name_columns(df, candidate_columns)
    if len(name_columns) == 0:
        note = ('No standard name columns found.\n'
                'Available columns: {}'.format(', '.join(map(str, df.columns))))
        return FilterOutcome(name_columns, df, False, note)

    keep = pd.Series(False, index=df.index)
    for col in name_columns:
        keep |= df[col].map(lambda v: contains_keyword(v, region_keyword)).astype(bool)
    if not keep.any():
        note = ("No features found with '{}' in name fields: {}".format(
            region_keyword, ', '.join(name_columns)))
        return FilterOutcome(name_columns, df, False, note)
    return FilterOutcome(name_columns, df.loc[keep.values].copy(), True, None)
