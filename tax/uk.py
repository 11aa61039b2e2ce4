"""UK tax constants and functions."""


#
# Copyright (c) 2023 LateGenXer
#
# SPDX-License-Identifier: AGPL-3.0-or-later
#


import enum
import logging
import typing

from decimal import Decimal


logger = logging.getLogger('tax')


tax_year = '2015/16'


# All amounts are in pence.

# https://www.gov.uk/government/publications/rates-and-allowances-income-tax/income-tax-rates-and-allowances-current-and-past
max_personal_allowance       =   1060000  # £10,600
personal_allowance_threshold =  10000000  # £100,000
basic_rate_threshold         =   3178500  # £31,785
higher_rate_threshold        =  15000000  # £150,000
basic_rate                   = Decimal('0.20')
higher_rate                  = Decimal('0.40')
additional_rate              = Decimal('0.45')

# Allowance is fully withdrawn at £121,200
assert personal_allowance_threshold + 2*max_personal_allowance == 12120000
assert personal_allowance_threshold + 2*max_personal_allowance < higher_rate_threshold


# https://www.gov.uk/government/publications/rates-and-allowances-national-insurance-contributions/rates-and-allowances-national-insurance-contributions
# Class 1, category A
ni_lel  =   582400  # Lower Earnings Limit
ni_pt   =   806000  # Primary Threshold
ni_st   =   811200  # Secondary Threshold (employer)
ni_uap  =  4004000  # Upper Accrual Point
ni_ust  =  4238500  # Upper Secondary Threshold, under 21 (employer)
ni_uel  =  4238500  # Upper Earnings Limit
ni_lower_rate  = Decimal('0.02')
ni_middle_rate = Decimal('0.0585')  # contracted-out rebate band, not charged
ni_upper_rate  = Decimal('0.106')
ni_top_rate    = Decimal('0.12')

assert 0 < ni_lel < ni_pt < ni_uap <= ni_uel


def truncate(amount:int, rate:Decimal) -> int:
    '''Multiply an amount in pence by a rate, truncating toward zero.'''
    # Integer arithmetic, so the result is exact whatever the size of amount
    numerator, denominator = rate.as_integer_ratio()
    product = abs(amount) * numerator // denominator
    return product if amount >= 0 else -product


class TaperRounding(enum.Enum):
    '''How the excess over the taper threshold is rounded before halving.'''

    # Drop the odd penny
    PENCE = 'pence'

    # Drop the odd pound, so £1 is lost per whole £2.  For whole-pound
    # incomes this gives the historic figures; for an excess with pence it
    # drops the whole remainder below £2, where the historic rule only
    # dropped £1 (and was not monotonic).
    POUNDS = 'pounds'


# https://www.gov.uk/income-tax-rates/income-over-100000
def personal_allowance(gross:int, rounding:TaperRounding=TaperRounding.PENCE) -> int:
    rounding = TaperRounding(rounding)
    if gross <= personal_allowance_threshold:
        return max_personal_allowance

    difference = gross - personal_allowance_threshold
    if rounding is TaperRounding.PENCE:
        difference -= difference % 2
    else:
        assert rounding is TaperRounding.POUNDS
        difference -= difference % 200

    allowance = max_personal_allowance - difference // 2
    return min(max(allowance, 0), max_personal_allowance)


class IncomeTax(typing.NamedTuple):

    basic_rate: int
    higher_rate: int
    additional_rate: int

    @property
    def total(self) -> int:
        return self.basic_rate + self.higher_rate + self.additional_rate


def income_tax(gross:int, allowance:int) -> IncomeTax:
    assert 0 <= allowance <= max_personal_allowance

    # The additional rate applies above the threshold regardless of allowance
    additional = truncate(max(gross - higher_rate_threshold, 0), additional_rate)

    assessed_basic_rate_threshold = basic_rate_threshold + allowance

    higher = 0
    if gross > assessed_basic_rate_threshold:
        upper = min(gross, higher_rate_threshold)
        higher = truncate(max(upper - assessed_basic_rate_threshold, 0), higher_rate)

    basic = 0
    if gross > allowance:
        upper = min(gross, assessed_basic_rate_threshold)
        basic = truncate(max(upper - allowance, 0), basic_rate)

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug('assessed_basic_rate_threshold = %i', assessed_basic_rate_threshold)
        logger.debug('20 = %i', basic)
        logger.debug('40 = %i', higher)
        logger.debug('45 = %i', additional)

    return IncomeTax(basic, higher, additional)


# Each band is realized in full below the one containing the income, and
# each band's slice is truncated on its own.
def national_insurance(gross:int) -> int:
    if gross < ni_lel:
        return 0

    # Between LEL and PT contributions are notionally paid at 0%
    if gross < ni_pt:
        return 0

    if gross < ni_uap:
        return truncate(gross - ni_pt, ni_top_rate)
    contribution = truncate(ni_uap - ni_pt, ni_top_rate)

    if gross <= ni_uel:
        return contribution + truncate(gross - ni_uap, ni_top_rate)
    contribution += truncate(ni_uel - ni_uap, ni_top_rate)

    return contribution + truncate(gross - ni_uel, ni_lower_rate)
