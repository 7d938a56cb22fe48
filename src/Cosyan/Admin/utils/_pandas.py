# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Internal pandas helpers"""

from __future__ import annotations

from typing import Iterable, List

import pandas as pd

from ..models.entity import Entity


def entities_to_dataframe(entities: Iterable[Entity]) -> pd.DataFrame:
    """Convert entities to a DataFrame, one row per entity and one column per field.

    Column order follows the first entity's field order. Columns keep object dtype so values
    stay as the server sent them and missing values stay ``None``.
    """
    entities = list(entities)
    columns: List[str] = list(entities[0]) if entities else []
    rows = [entity.to_dict() for entity in entities]
    return pd.DataFrame(rows, columns=columns, dtype=object)
