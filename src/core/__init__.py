"""
Core: десятичное число произвольной точности и его примитивы.

- domain: BigDecimal, разбор литералов, форматирование
- math: правила округления, операции над коэффициентами
- contracts: JSON Schema контракты сериализованных форм
- errors: иерархия исключений
"""
