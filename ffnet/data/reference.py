"""Reference networks with known outputs.

Each case is a trained network together with input rows and the outputs the
network is known to produce for them. They are used to verify an evaluator
end to end.
"""

from dataclasses import dataclass
from typing import Dict, List, Tuple


@dataclass(frozen=True)
class ReferenceCase:
    """A trained network with verification data.

    Attributes:
        name: Case identifier
        topology: (nx, nh, ny)
        weights: Flat weight sequence
        inputs: Input rows, nx values each
        expected: Expected output rows, ny values each
        tolerance: Maximum allowed absolute error per output
        normalize_outputs: Whether the output layer is softmax-normalized
    """

    name: str
    topology: Tuple[int, int, int]
    weights: Tuple[float, ...]
    inputs: Tuple[Tuple[float, ...], ...]
    expected: Tuple[Tuple[float, ...], ...]
    tolerance: float
    normalize_outputs: bool = False


def _rows(values: List[float], width: int) -> Tuple[Tuple[float, ...], ...]:
    return tuple(tuple(values[i : i + width]) for i in range(0, len(values), width))


REFERENCE_631 = ReferenceCase(
    name="631",
    topology=(6, 3, 1),
    weights=(
        # b->h1        i1->h1       i2->h1       i3->h1       i4->h1       i5->h1       i6->h1
        6.31414733, 0.65097616, 9.57090502, 0.09918807, 0.34747524, -0.22119165, -1.46227569,
        # b->h2        i1->h2       i2->h2       i3->h2       i4->h2       i5->h2       i6->h2
        -2.90137623, 5.28471412, -18.85611073, -1.23064304, 0.67967101, -0.52377262, 2.18077394,
        # b->h3        i1->h3       i2->h3       i3->h3       i4->h3       i5->h3       i6->h3
        2.73558004, 1.84685605, -1.34649983, 9.83496163, -8.08858473, 1.23608243, -11.48135362,
        # b->o         h1->o        h2->o        h3->o
        -3.51048773, -7.08398606, 11.45778956, -19.95901352,
    ),
    inputs=_rows([
        0.37182781, -0.8311404, 0.4259828, -1.4220337, 0.18336578, -2.2287368,
        0.54980689, -0.8311404, 1.0703898, -0.5883251, 0.18336578, -1.0588553,
        -1.06745579, 1.5445350, -0.7493098, 1.1007028, -1.06960449, 0.6201034,
        0.09560690, -0.6512472, -0.7493098, 0.3154891, 0.08288661, 0.6201034,
        -2.43320564, 2.5265420, -0.4770242, 1.2647570, -1.09247945, 0.5813455,
        -1.81966033, 1.3682108, -0.4770242, 1.2093380, -1.01113866, 0.5813455,
        -0.67703554, -0.7889860, -0.4770242, 0.4291913, 0.13391541, 0.5813455,
        -0.39566591, -0.7031708, -0.7544150, 0.2704232, 0.04057550, 0.6718149,
    ], 6),
    expected=_rows([
        0.00000e+00,
        0.00000e+00,
        2.50535e-05,
        9.96561e-01,
        2.50535e-05,
        2.50535e-05,
        9.99381e-01,
        9.98889e-01,
    ], 1),
    tolerance=5e-7,
)

REFERENCE_321 = ReferenceCase(
    name="321",
    topology=(3, 2, 1),
    weights=(
        0.56974212, -1.5468268, 1.494846, -2.8907045,
        -6.5020564, 3.0203401, -1.7088961, 2.5260361,
        3.393649, -6.7710899, -7.2983476,
    ),
    inputs=_rows([
        1.4, 6.8, 4.8,
        2.3, 6.4, 5.3,
        1.3, 5.7, 4.1,
        0.2, 4.7, 1.3,
        1.4, 7.0, 4.7,
        2.5, 6.7, 5.7,
        1.9, 5.8, 5.1,
        0.2, 4.8, 1.6,
        0.1, 4.3, 1.1,
        1.5, 6.0, 5.0,
        1.3, 5.7, 4.2,
        1.3, 5.5, 4.0,
        1.3, 5.6, 4.1,
        2.2, 7.7, 6.7,
        0.2, 5.4, 1.7,
        1.8, 7.3, 6.3,
        0.3, 5.7, 1.7,
        0.2, 5.1, 1.6,
        1.0, 5.0, 3.5,
        1.4, 6.1, 4.7,
    ], 3),
    expected=_rows([
        0.90864414, 0.028647561, 0.91948747, 0.039752923, 0.93738283,
        0.022455461, 0.039801861, 0.047723386, 0.03885664, 0.27093682,
        0.90293789, 0.91397009, 0.90881932, 0.022725684, 0.040591468,
        0.036147026, 0.038563865, 0.042004902, 0.94917055, 0.76039408,
    ], 1),
    tolerance=7.8e-7,
)

# Three-class classifier: logistic hidden units, softmax-normalized outputs.
REFERENCE_423 = ReferenceCase(
    name="423",
    topology=(4, 2, 3),
    weights=(
        -7.5744544, -0.98429384, -1.216025, 1.9840944, 4.3170568,
        0.35806831, 0.47724404, 1.5541206, -2.4603607, -0.99349176,
        -1.6232478, -2.1703089, 6.0064449,
        3.9738482, -5.5195306, -5.2175259,
        -2.3506086, 7.6898515, -0.78892375,
    ),
    inputs=_rows([
        4.4, 3.0, 1.3, 0.2,
        5.1, 3.8, 1.9, 0.4,
        4.9, 3.0, 1.4, 0.2,
        5.4, 3.4, 1.5, 0.4,
        7.2, 3.2, 6.0, 1.8,
        5.6, 2.7, 4.2, 1.3,
        6.0, 2.2, 5.0, 1.5,
        4.8, 3.1, 1.6, 0.2,
        6.9, 3.2, 5.7, 2.3,
        5.0, 3.5, 1.6, 0.6,
        6.3, 3.3, 4.7, 1.6,
        5.5, 2.3, 4.0, 1.3,
        7.2, 3.6, 6.1, 2.5,
        5.7, 2.6, 3.5, 1.0,
        6.9, 3.1, 4.9, 1.5,
        6.2, 2.8, 4.8, 1.8,
        5.4, 3.0, 4.5, 1.5,
        4.6, 3.4, 1.4, 0.3,
        6.4, 2.7, 5.3, 1.9,
        4.6, 3.2, 1.4, 0.2,
    ], 4),
    expected=_rows([
        0.99470267, 0.0046660095, 0.00063132111,
        0.99456831, 0.0047902576, 0.0006414322,
        0.99469299, 0.0046749691, 0.00063204182,
        0.99512325, 0.0042776915, 0.00059906041,
        0.0011873214, 0.025462821, 0.97334986,
        0.0055198862, 0.9890041, 0.0054760163,
        0.006172877, 0.25299856, 0.74082856,
        0.99404932, 0.0052711547, 0.00067952264,
        0.00017412947, 0.0019279709, 0.9978979,
        0.994605, 0.0047562526, 0.00063874748,
        0.0071978296, 0.97461438, 0.018187792,
        0.0056746864, 0.98769809, 0.0066272266,
        0.00013261192, 0.0013410981, 0.99852629,
        0.0088674358, 0.9884324, 0.0027001664,
        0.0059661661, 0.98447395, 0.0095598806,
        0.0065476968, 0.2689804, 0.7244719,
        0.0085873027, 0.94774833, 0.043664363,
        0.99509328, 0.0043053246, 0.00060139864,
        0.00059435524, 0.0099872336, 0.98941841,
        0.99489201, 0.0044910661, 0.00061692014,
    ], 3),
    tolerance=7.8e-7,
    normalize_outputs=True,
)

REFERENCE_CASES: Dict[str, ReferenceCase] = {
    case.name: case for case in (REFERENCE_631, REFERENCE_321, REFERENCE_423)
}


def get_reference_case(name: str) -> ReferenceCase:
    """Look up a reference case by name ('631', '321' or '423')."""
    if name not in REFERENCE_CASES:
        raise ValueError(
            f"Unknown reference case '{name}'. Choose from {sorted(REFERENCE_CASES)}."
        )
    return REFERENCE_CASES[name]
