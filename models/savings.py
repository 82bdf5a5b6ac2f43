# MIT License
"""Compound savings with yearly contributions.

The balance starts at ``start`` (first year) and each following year
earns ``rate`` on the previous balance before ``contribution`` is added.
"""

from __future__ import annotations
import numpy as np

from modelling.model import Bind, Model, register_model


@register_model
class Savings(Model):
    LL = Bind(int)
    start = Bind()
    rate = Bind()
    contribution = Bind()

    interest = Bind()
    balance = Bind()
    cum_contribution = Bind()

    def run(self) -> None:
        n = self.LL
        balance = np.zeros(n)
        interest = np.zeros(n)
        balance[0] = self.start[0]
        for t in range(1, n):
            interest[t] = balance[t - 1] * self.rate[t]
            balance[t] = balance[t - 1] + interest[t] + self.contribution[t]
        self.interest = interest
        self.balance = balance
        contributions = self.contribution.copy()
        contributions[0] = 0.0
        self.cum_contribution = np.cumsum(contributions)
