from models.game import GuessResult


def evaluate(target: int, guess: int) -> GuessResult:
    """Compare a guess against the target. Out-of-range guesses are allowed."""
    if guess < target:
        return GuessResult.TOO_LOW
    if guess > target:
        return GuessResult.TOO_HIGH
    return GuessResult.CORRECT
