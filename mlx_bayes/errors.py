"""Exceptions and warnings raised by MLX-Bayes."""


class ParameterError(ValueError):
    """Invalid distribution or tuning parameters.

    Raised at construction time, before any random draw is consumed.
    """


class EmptyInputError(ValueError):
    """An estimator was given an empty sample sequence."""


class RejectionExhausted(RuntimeError):
    """A rejection or ABC loop hit its attempt cap.

    Attributes
    ----------
    attempts : int
        Number of proposals drawn before giving up
    accepted : int
        Number of proposals that had been accepted
    """

    def __init__(self, message, attempts=0, accepted=0):
        super().__init__(message)
        self.attempts = attempts
        self.accepted = accepted


class TargetEvaluationError(RuntimeError):
    """A caller-supplied log density evaluated to NaN or +inf."""


class DegenerateChainWarning(UserWarning):
    """An MCMC run accepted no proposals, so its trace never moved."""
