"""
Holding utility methods and "global" constants that pertain to all tests.
So, this entails segment CSV reading and filepath resolving.
Fixtures here build the objects that are used throughout various tests
(e.g. the incidence graph of each test shape).
"""

import logging
import pathlib

import pytest

from pygraphical.core.common import VERTEX_EQUAL_PRECISION
from pygraphical.core.segment import Segment
from pygraphical.topology.incidence_graph import IncidenceGraph
from pygraphical.utils.segment_io import read_segments_csv

logger: logging.Logger = logging.getLogger(__name__)


@pytest.fixture(scope="session", params=[
    ("square", "segments.csv"),
    ("figure_eight", "segments.csv"),
    ("l_and_segment", "segments.csv"),
])
def testing_fileinfo(request) -> tuple[pathlib.Path, pathlib.Path]:
    """ Flexible method to resolve filepath of test data.

    :returns: tuple of folderpath and filepath to a given segment csv file
    """
    # Setup
    foldername: str
    csv_filename: str
    foldername, csv_filename = request.param
    base_folderpath: pathlib.Path = pathlib.Path(__file__).parent / "data"

    # Return values
    base_data_folderpath: pathlib.Path = base_folderpath / foldername
    csv_filepath: pathlib.Path = base_folderpath / foldername / csv_filename
    return base_data_folderpath, csv_filepath


@pytest.fixture(scope="session")
def parsed_segments(testing_fileinfo: tuple[pathlib.Path, pathlib.Path]) -> list[Segment]:
    """
    Segments of the current test shape, in file order.
    """
    csv_filepath: pathlib.Path
    _, csv_filepath = testing_fileinfo
    return read_segments_csv(csv_filepath)


@pytest.fixture(scope="session")
def initialize_incidence_graph(parsed_segments: list[Segment]) -> IncidenceGraph:
    """
    Fixture to build the IncidenceGraph from the parsed_segments fixture.
    """
    return IncidenceGraph(parsed_segments, VERTEX_EQUAL_PRECISION)
