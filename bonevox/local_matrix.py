"""Product of the reference hexahedral element stiffness matrix with a vector."""

from __future__ import annotations

from collections.abc import Sequence


def apply_reference_stiffness(x: Sequence[float]) -> list[float]:
    """Return K x for the 24x24 reference element matrix K (3 dofs per node)."""
    if len(x) != 24:
        raise ValueError(f"expected 24 nodal values, got {len(x)}")
    X = [float(v) for v in x]

    t418 = X[18] - X[12]
    t419 = X[18] + X[12]
    t420 = X[13] - X[19]
    t421 = X[13] + X[19]
    s710 = t418 + t420
    s711 = t418 - t420
    t422 = X[0] - X[6]
    t423 = X[0] + X[6]
    t424 = X[7] - X[1]
    t425 = X[7] + X[1]
    s712 = t422 + t424
    s713 = t422 - t424
    t426 = X[3] - X[9]
    t427 = X[9] + X[3]
    t428 = X[4] - X[10]
    t429 = X[10] + X[4]
    s714 = t426 + t428
    s715 = t426 - t428
    t430 = X[21] - X[15]
    t431 = X[15] + X[21]
    t432 = X[22] - X[16]
    t433 = X[16] + X[22]
    s716 = t430 + t432
    s717 = t430 - t432
    s718 = s710 + s712
    s719 = t419 - t423
    s720 = t421 - t425
    s721 = s711 + s713
    s722 = s711 - s713
    s723 = s714 + s716
    s724 = t431 - t427
    s725 = t433 - t429
    s726 = s715 + s717
    s727 = s715 - s717
    s728 = (t419 + t423) - (t427 + t431)
    s729 = (t421 + t425) - (t429 + t433)
    s730 = X[20] + X[14]
    s731 = X[20] - X[14]
    s732 = X[5] + X[11]
    s733 = X[11] - X[5]
    s734 = s730 - s732
    s735 = X[8] + X[2]
    s736 = X[8] - X[2]
    s737 = X[17] + X[23]
    s738 = X[23] - X[17]
    s739 = s735 - s737
    s740 = s731 + s736
    s741 = s731 - s736
    s742 = s733 + s738
    s743 = s733 - s738
    s744 = 0.5 * (s721 + s726)
    s745 = 0.5 * (s722 + s727)
    s746 = 0.5 * (s734 + s739)
    s747 = 0.5 * (s734 - s739)
    t434 = 9.0 * s745 + 5.4 * s747
    t435 = 5.4 * s745 + 12.6 * s747
    t436 = 1.8 * s744 + 1.2 * s746
    t437 = 1.2 * s744 + 2.4 * s746
    a245 = 1.8 * (s719 + s724)
    a246 = 1.8 * s740
    a247 = 1.8 * s742
    t438 = (a245 + a246) - a247
    a248 = 1.8 * (s720 + s725)
    t439 = a248 + a246 + a247
    t440 = a245 + a248 + 3.6 * s740
    t441 = (a248 - a245) + 3.6 * s742
    a249 = 0.9 * s741
    a250 = 0.9 * s743
    t442 = (2.7 * s728 + a249) - a250
    t443 = 2.7 * s729 + a249 + a250
    a251 = 0.9 * s728
    a252 = 0.9 * s729
    t444 = a251 + a252 + 5.4 * s741
    t445 = (a252 - a251) + 5.4 * s743
    s748 = 1.8 * (s722 - s727)
    s749 = 1.8 * (s721 - s726)
    s750 = 0.9 * (s718 - s723)
    s751 = 1.8 * ((s710 - s712) + (s714 - s716))
    s752 = 0.3 * (s718 + s723)
    s753 = 1.1 * (s719 - s724)
    s754 = 1.1 * (s720 - s725)
    s755 = 1.1 * ((s730 + s732) - (s735 + s737))
    s756 = s752 + t436
    s757 = s752 - t436
    t446 = s756 + t442
    t447 = s756 - t442
    t448 = s757 + t443
    t449 = s757 - t443
    s758 = s751 + t434
    s759 = s751 - t434
    t450 = s758 + t438
    t451 = s758 - t438
    t452 = s759 + t439
    t453 = s759 - t439
    s760 = s750 + s749
    s761 = s750 - s749
    t454 = s748 + s753
    t455 = s748 - s753
    t456 = s754 - s748
    t457 = s748 + s754
    s762 = t446 + t450
    s763 = t446 - t450
    s764 = t448 + t452
    s765 = t448 - t452
    s766 = t447 + t451
    s767 = t447 - t451
    s768 = t449 + t453
    s769 = t449 - t453
    s770 = s760 + t454
    s771 = s760 - t454
    s772 = s761 + t456
    s773 = s761 - t456
    s774 = s760 + t455
    s775 = s760 - t455
    s776 = s761 - t457
    s777 = s761 + t457
    t458 = t437 + t440
    t459 = t437 - t440
    t460 = t437 + t441
    t461 = t437 - t441
    t462 = t435 + s755
    t463 = t435 - s755
    t464 = t462 + t444
    t465 = t462 - t444
    t466 = t463 + t445
    t467 = t463 - t445

    return [
        s763 + s771,
        -(s769 + s777),
        t459 - t465,
        s766 - s774,
        s768 - s776,
        -(t460 + t466),
        -(s767 + s775),
        s765 + s773,
        t458 - t464,
        s770 - s762,
        s772 - s764,
        -(t461 + t467),
        -(s766 + s774),
        s764 + s772,
        t459 + t465,
        s771 - s763,
        s773 - s765,
        t466 - t460,
        s762 + s770,
        -(s768 + s776),
        t458 + t464,
        s767 - s775,
        s769 - s777,
        t467 - t461,
    ]