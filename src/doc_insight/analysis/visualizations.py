"""
Chart payloads derived from topics and entities.
"""

from collections import Counter
from typing import List

from ..models.analysis import (
    EntityResult,
    TopicResult,
    VisualizationData,
    VisualizationType,
)


def _chart_data(labels: List[str], dataset_label: str, values: List[int]) -> dict:
    return {
        "labels": labels,
        "datasets": [{"label": dataset_label, "data": values}],
    }


def generate_visualizations(
    topics: List[TopicResult],
    entities: List[EntityResult],
) -> List[VisualizationData]:
    """
    Topic frequency chart and entity type distribution chart.

    Each chart is emitted only when it has data; entity types appear in the
    order first encountered.
    """
    visualizations: List[VisualizationData] = []

    if topics:
        visualizations.append(
            VisualizationData(
                type=VisualizationType.CHART,
                title="Topic Frequency Analysis",
                data=_chart_data(
                    [t.topic for t in topics], "Frequency", [t.frequency for t in topics]
                ),
                description="Most frequently mentioned topics in the document",
            )
        )

    if entities:
        type_counts = Counter(entity.type.value for entity in entities)
        visualizations.append(
            VisualizationData(
                type=VisualizationType.CHART,
                title="Entity Type Distribution",
                data=_chart_data(list(type_counts), "Count", list(type_counts.values())),
                description="Distribution of different entity types found in the document",
            )
        )

    return visualizations
