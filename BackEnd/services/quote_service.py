import random

QUOTES = (
	"Stay focused, stay humble.",
	"Deep work is the key to mastery.",
	"Small progress is still progress.",
	"Discipline beats motivation.",
	"One pomodoro at a time.",
	"Your future self will thank you.",
	"Focus is a muscle, train it daily.",
)

def pick_quote(rng=random):
	"""Random motivational quote, wrapped in double quotes for display."""
	return f'"{rng.choice(QUOTES)}"'
