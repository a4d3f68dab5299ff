"""
Core domain models, price codec, boundary contracts and logging.

Этот пакет не зависит от сервисов пайплайна: здесь только value objects,
конверсия дробной нотации цен и JSON Schema контракты входных записей.
"""
