# MIT License
"""GDP by expenditure components.

Private consumption (KI), public consumption (KS), investment (INW),
exports (EKS) and imports (IMP) start from their first-year value and
grow by their yearly growth factors (``tw*``, e.g. 1.03 for +3%).  GDP
(PKB) is ``KI + KS + INW + EKS - IMP``.
"""

from __future__ import annotations

from modelling.model import Bind, Model, register_model


@register_model
class Model1(Model):
    LL = Bind(int)  # number of years

    twKI = Bind()
    twKS = Bind()
    twINW = Bind()
    twEKS = Bind()
    twIMP = Bind()

    KI = Bind()
    KS = Bind()
    INW = Bind()
    EKS = Bind()
    IMP = Bind()

    PKB = Bind()

    def run(self) -> None:
        components = [(self.KI, self.twKI), (self.KS, self.twKS), (self.INW, self.twINW),
                      (self.EKS, self.twEKS), (self.IMP, self.twIMP)]
        for t in range(1, self.LL):
            for level, growth in components:
                level[t] = growth[t] * level[t - 1]
        self.PKB = self.KI + self.KS + self.INW + self.EKS - self.IMP
