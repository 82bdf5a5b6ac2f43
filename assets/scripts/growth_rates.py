# year-on-year GDP growth in percent; the first year has no predecessor
dPKB = np.zeros(LL)
for i in range(1, LL):
    dPKB[i] = (PKB[i] / PKB[i - 1] - 1) * 100
