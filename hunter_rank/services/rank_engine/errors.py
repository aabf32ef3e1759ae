"""Exceptions raised by the rank engine."""


class InvalidInputError(ValueError):
	"""Raised when a caller passes a level or EXP value outside the valid domain"""
	pass


class RankTableError(ValueError):
	"""Raised when a rank table or its JSON config breaks the table invariants"""
	pass
