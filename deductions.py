#!/usr/bin/env python3
#
# Copyright (c) 2023 LateGenXer
#
# SPDX-License-Identifier: AGPL-3.0-or-later
#

#
# Take-home pay calculator: income tax and employee National Insurance
# deductions from a gross annual salary.
#
# All amounts are integer pence.
#


import argparse
import dataclasses
import functools
import logging
import re
import sys
import typing

import pandas as pd

import tax.uk as uk

from environ import get_version
from tax.uk import TaperRounding


logger = logging.getLogger('deductions')


class InvalidInput(ValueError):
    pass


def validate(amount:typing.Any) -> int:
    # bool is an int subclass, but never an amount
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise InvalidInput(f'gross income must be an integer amount of pence, got {amount!r}')
    if amount < 0:
        raise InvalidInput(f'gross income must not be negative, got {amount}')
    return amount


_amount_re = re.compile(r'^£?([0-9]{1,3}(?:,[0-9]{3})+|[0-9]+(?:_[0-9]+)*)(?:\.([0-9]{1,2}))?$')


def parse_amount(text:str) -> int:
    '''Parse an amount in pounds, such as "£42,385.50", into pence.'''
    mo = _amount_re.match(text.strip())
    if mo is None:
        raise InvalidInput(f'invalid amount {text!r}')
    pounds, pence = mo.groups()
    pounds = int(pounds.replace(',', '').replace('_', ''))
    pence = int((pence or '0').ljust(2, '0'))
    return pounds * 100 + pence


labels = {
    'gross_annual_income':             'Gross Income',
    'personal_allowance':              'Personal Allowance',
    'basic_rate_deduction':            'Basic Rate Tax',
    'higher_rate_deduction':           'Higher Rate Tax',
    'additional_rate_deduction':       'Additional Rate Tax',
    'total_tax_deduction':             'Income Tax',
    'national_insurance_contribution': 'National Insurance',
    'total_deduction':                 'Total Deductions',
    'net_annual_income':               'Net Income',
}


@dataclasses.dataclass(frozen=True)
class IncomeAssessment:
    gross_annual_income: int
    personal_allowance: int
    basic_rate_deduction: int
    higher_rate_deduction: int
    additional_rate_deduction: int
    total_tax_deduction: int
    national_insurance_contribution: int
    total_deduction: int
    net_annual_income: int

    def rows(self) -> list[tuple[str, int]]:
        return [(label, getattr(self, name)) for name, label in labels.items()]


def assess(gross:int, rounding:TaperRounding=TaperRounding.PENCE) -> IncomeAssessment:
    '''Assess the deductions on a gross annual income.

    The allowance is computed first, as it determines where the basic rate
    band ends, then the tax bands, then National Insurance.
    '''
    return _assess(validate(gross), TaperRounding(rounding))


@functools.lru_cache(maxsize=1024)
def _assess(gross:int, rounding:TaperRounding) -> IncomeAssessment:
    allowance = uk.personal_allowance(gross, rounding)
    income_tax = uk.income_tax(gross, allowance)
    ni = uk.national_insurance(gross)

    total_deduction = income_tax.total + ni
    net = gross - total_deduction

    assert 0 <= allowance <= uk.max_personal_allowance
    assert total_deduction >= 0
    assert net <= gross

    logger.debug('Assessed %i: tax %i, NI %i, net %i', gross, income_tax.total, ni, net)

    return IncomeAssessment(
        gross_annual_income=gross,
        personal_allowance=allowance,
        basic_rate_deduction=income_tax.basic_rate,
        higher_rate_deduction=income_tax.higher_rate,
        additional_rate_deduction=income_tax.additional_rate,
        total_tax_deduction=income_tax.total,
        national_insurance_contribution=ni,
        total_deduction=total_deduction,
        net_annual_income=net,
    )


class DeductionCalculator:
    '''Holds a gross annual income and its assessment.

    Every change of gross income recomputes the whole assessment.  The
    compute_* methods are pure functions of the stored gross income.
    '''

    def __init__(self, rounding:TaperRounding=TaperRounding.PENCE):
        self.rounding = TaperRounding(rounding)
        self._gross_annual_income = 0
        self._assessment = assess(0, rounding)

    def set_gross_income(self, amount:int) -> None:
        self._gross_annual_income = validate(amount)
        self.recompute_net_income()

    def compute_personal_allowance(self) -> int:
        return uk.personal_allowance(self._gross_annual_income, self.rounding)

    def compute_income_tax_deduction(self) -> int:
        allowance = self.compute_personal_allowance()
        return uk.income_tax(self._gross_annual_income, allowance).total

    def compute_insurance_contribution(self) -> int:
        return uk.national_insurance(self._gross_annual_income)

    def compute_total_deduction(self) -> int:
        return self.compute_income_tax_deduction() + self.compute_insurance_contribution()

    def recompute_net_income(self) -> None:
        self._assessment = assess(self._gross_annual_income, self.rounding)

    @property
    def assessment(self) -> IncomeAssessment:
        return self._assessment

    @property
    def gross_annual_income(self) -> int:
        return self._assessment.gross_annual_income

    @property
    def personal_allowance(self) -> int:
        return self._assessment.personal_allowance

    @property
    def basic_rate_deduction(self) -> int:
        return self._assessment.basic_rate_deduction

    @property
    def higher_rate_deduction(self) -> int:
        return self._assessment.higher_rate_deduction

    @property
    def additional_rate_deduction(self) -> int:
        return self._assessment.additional_rate_deduction

    @property
    def total_tax_deduction(self) -> int:
        return self._assessment.total_tax_deduction

    @property
    def national_insurance_contribution(self) -> int:
        return self._assessment.national_insurance_contribution

    @property
    def total_deduction(self) -> int:
        return self._assessment.total_deduction

    @property
    def net_annual_income(self) -> int:
        return self._assessment.net_annual_income


def table(incomes:typing.Iterable[int], rounding:TaperRounding=TaperRounding.PENCE) -> pd.DataFrame:
    '''Breakdown of several incomes, one row each, in pence.'''
    data = [dataclasses.asdict(assess(income, rounding)) for income in incomes]
    columns = [field.name for field in dataclasses.fields(IncomeAssessment)]
    return pd.DataFrame(data, columns=columns)


def main():
    argparser = argparse.ArgumentParser(description=f'Take-home pay for the {uk.tax_year} tax year.')
    argparser.add_argument('--taper-rounding', choices=[r.value for r in TaperRounding], default=TaperRounding.PENCE.value, help='rounding of the income over the personal allowance taper threshold')
    argparser.add_argument('--csv', action='store_true', help='output CSV, in pence')
    argparser.add_argument('-v', '--verbose', action='store_true')
    argparser.add_argument('--version', action='store_true', help='show version and exit')
    argparser.add_argument('incomes', metavar='INCOME', nargs='*', help='gross annual income in pounds')
    args = argparser.parse_args()

    if args.version:
        print(get_version())
        return
    if not args.incomes:
        argparser.error('at least one INCOME is required')

    logging.basicConfig(format='%(asctime)s %(name)s %(levelname)s %(message)s', level=logging.DEBUG if args.verbose else logging.WARNING)

    incomes = []
    for text in args.incomes:
        try:
            incomes.append(parse_amount(text))
        except InvalidInput as e:
            argparser.error(str(e))

    df = table(incomes, TaperRounding(args.taper_rounding))

    if args.csv:
        df.to_csv(sys.stdout, index=False)
        return

    df = df.rename(columns=labels, errors='raise').set_index('Gross Income')
    df = df.T / 100
    df.columns = [f'£{gross/100:,.2f}' for gross in df.columns]
    print(df.to_string(
        justify='right',
        float_format='{:,.2f}'.format,
    ))


if __name__ == '__main__':
    main()
