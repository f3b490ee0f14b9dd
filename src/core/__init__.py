"""
Core building blocks: the NewType wrapper and the units declared with it.

Модули не зависят от внешних систем; единственная сторонняя
зависимость - pydantic (записи Constructor Registry).
"""
