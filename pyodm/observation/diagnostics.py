# Copyright 2024 inuex35
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.


"""Residual tables of estimated measurements"""

import logging
from typing import Iterable

import pandas as pd

logger = logging.getLogger(__name__)

COLUMNS = ['type', 'date', 'component', 'iteration', 'evaluation',
           'observed', 'estimated', 'residual', 'sigma', 'status']


def estimations_to_dataframe(estimations: Iterable) -> pd.DataFrame:
    """
    Tabulate estimated measurements, one row per measurement component

    Parameters
    ----------
    estimations : iterable of EstimatedMeasurementBase
        Estimated measurements, possibly of different types

    Returns
    -------
    pd.DataFrame
        DataFrame with columns: type, date, component, iteration,
        evaluation, observed, estimated, residual (observed minus
        estimated), sigma and status, sorted by date
    """
    rows = []
    for estimated in estimations:
        measurement = estimated.observed_measurement
        observed = estimated.observed_value
        value = estimated.estimated_value
        sigma = measurement.theoretical_standard_deviation
        for i in range(len(observed)):
            rows.append({
                'type': measurement.measurement_type,
                'date': estimated.date,
                'component': i,
                'iteration': estimated.iteration,
                'evaluation': estimated.count,
                'observed': observed[i],
                'estimated': value[i],
                'residual': observed[i] - value[i],
                'sigma': sigma[i],
                'status': estimated.status.name,
            })

    df = pd.DataFrame(rows, columns=COLUMNS)
    if not df.empty:
        df = df.sort_values(['date', 'type', 'component'], kind='stable').reset_index(drop=True)
    logger.debug(f"Tabulated {len(df)} measurement components")
    return df


def residual_statistics(df: pd.DataFrame) -> pd.DataFrame:
    """Mean, standard deviation and RMS of the residuals per measurement type"""
    grouped = df.groupby('type')['residual']
    stats = pd.DataFrame({
        'count': grouped.count(),
        'mean': grouped.mean(),
        'std': grouped.std(ddof=0),
        'rms': grouped.apply(lambda r: float((r ** 2).mean() ** 0.5)),
    })
    return stats
