from enum import Enum

class ClassifierFamily(str, Enum):
    """The statistical model families a ClassifierBank can be trained with."""
    LOGISTIC_REGRESSION = "logistic_regression"
    NAIVE_BAYES = "naive_bayes"

    def __str__(self) -> str:
        return self.value
