# shares of GDP components
ZDEKS = EKS / PKB
ZDKI = KI / PKB
ZDKS = KS / PKB
ZDINW = INW / PKB
ZDIMP = IMP / PKB
