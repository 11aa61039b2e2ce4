#
# Copyright (c) 2023 LateGenXer
#
# SPDX-License-Identifier: AGPL-3.0-or-later
#


import logging

import pytest

from decimal import Decimal

from tax.uk import *


P = TaperRounding.PENCE
L = TaperRounding.POUNDS


# gross, rounding, allowance
personal_allowance_test_cases = [
    (0,        P, max_personal_allowance),
    (10000000, P, max_personal_allowance),
    (10000000, L, max_personal_allowance),
    (10000001, P, max_personal_allowance),
    (10000001, L, max_personal_allowance),
    (10000100, P, 1059950),
    (10000100, L, max_personal_allowance),
    (10000150, P, 1059925),
    (10000150, L, max_personal_allowance),
    (10000200, P, 1059900),
    (10000200, L, 1059900),
    (10000250, P, 1059875),
    (10000250, L, 1059900),
    (12119800, P, 100),
    (12119800, L, 100),
    (12119900, P, 50),
    (12119900, L, 100),
    (12120000, P, 0),
    (12120000, L, 0),
    (20000000, P, 0),
]

@pytest.mark.parametrize("gross,rounding,allowance", personal_allowance_test_cases)
def test_personal_allowance(gross:int, rounding:TaperRounding, allowance:int) -> None:
    assert personal_allowance(gross, rounding) == allowance


def test_personal_allowance_whole_pounds() -> None:
    # Both conventions agree whenever the excess is an even number of pounds
    for pounds in range(100000, 121300, 2):
        gross = pounds * 100
        assert personal_allowance(gross, P) == personal_allowance(gross, L)


# gross, allowance, basic, higher, additional
income_tax_test_cases = [
    (0,        max_personal_allowance,      0,       0,       0),
    (1000000,  max_personal_allowance,      0,       0,       0),
    (1060000,  max_personal_allowance,      0,       0,       0),
    (1060001,  max_personal_allowance,      0,       0,       0),
    (1060005,  max_personal_allowance,      1,       0,       0),
    (2000000,  max_personal_allowance, 188000,       0,       0),
    (4238500,  max_personal_allowance, 635700,       0,       0),
    (4238501,  max_personal_allowance, 635700,       0,       0),
    (4238503,  max_personal_allowance, 635700,       1,       0),
    (5000000,  max_personal_allowance, 635700,  304600,       0),
    (10000000, max_personal_allowance, 635700, 2304600,       0),
    (12120000, 0,                      635700, 3576600,       0),
    (15000000, 0,                      635700, 4728600,       0),
    (15000001, 0,                      635700, 4728600,       0),
    (15000003, 0,                      635700, 4728600,       1),
    (18000000, 0,                      635700, 4728600, 1350000),
]

@pytest.mark.parametrize("gross,allowance,basic,higher,additional", income_tax_test_cases)
def test_income_tax(gross:int, allowance:int, basic:int, higher:int, additional:int) -> None:
    result = income_tax(gross, allowance)
    assert result == IncomeTax(basic, higher, additional)
    assert result.total == basic + higher + additional


def test_income_tax_debug(caplog) -> None:
    caplog.set_level(logging.DEBUG, logger='tax')
    income_tax(5000000, max_personal_allowance)
    assert 'assessed_basic_rate_threshold = 4238500' in caplog.text
    assert '40 = 304600' in caplog.text


# gross, contribution
national_insurance_test_cases = [
    (0,              0),
    (ni_lel - 1,     0),
    (ni_lel,         0),
    (ni_pt - 1,      0),
    (ni_pt,          0),
    (ni_pt + 1,      0),
    (ni_pt + 9,      1),
    (ni_uap - 1,     383759),
    (ni_uap,         383760),
    (ni_uap + 9,     383761),
    (ni_uel,         411900),
    (ni_uel + 1,     411900),
    (ni_uel + 50,    411901),
    (5000000,        427130),
    (10000000,       527130),
    (18000000,       687130),
]

@pytest.mark.parametrize("gross,contribution", national_insurance_test_cases)
def test_national_insurance(gross:int, contribution:int) -> None:
    assert national_insurance(gross) == contribution


@pytest.mark.parametrize("amount,rate,result", [
    (0,       Decimal('0.45'), 0),
    (1,       Decimal('0.45'), 0),
    (3,       Decimal('0.45'), 1),
    (3178500, Decimal('0.20'), 635700),
    (3198000, Decimal('0.12'), 383760),
    (-3,      Decimal('0.45'), -1),
    (10**29 - 1,    Decimal('0.45'), 44999999999999999999999999999),
    (-(10**29 - 1), Decimal('0.45'), -44999999999999999999999999999),
    (10**40 + 7,    Decimal('0.0585'), 585 * 10**36),
])
def test_truncate(amount:int, rate:Decimal, result:int) -> None:
    assert truncate(amount, rate) == result

