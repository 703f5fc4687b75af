"""Risk coordinates in the ISDA SIMM sensitivity taxonomy."""

from dataclasses import dataclass
from enum import Enum


class RiskClass(Enum):
    INTEREST_RATE = "InterestRate"
    CREDIT_QUALIFYING = "CreditQ"
    CREDIT_NON_QUALIFYING = "CreditNonQ"
    EQUITY = "Equity"
    COMMODITY = "Commodity"
    FX = "FX"


class ProductClass(Enum):
    RATES_FX = "RatesFX"
    CREDIT = "Credit"
    EQUITY = "Equity"
    COMMODITY = "Commodity"


# SIMM risk types and the risk class they belong to
RISK_TYPE_CLASSES = {
    "Risk_IRCurve": RiskClass.INTEREST_RATE,
    "Risk_Inflation": RiskClass.INTEREST_RATE,
    "Risk_XCcyBasis": RiskClass.INTEREST_RATE,
    "Risk_IRVol": RiskClass.INTEREST_RATE,
    "Risk_CreditQ": RiskClass.CREDIT_QUALIFYING,
    "Risk_CreditNonQ": RiskClass.CREDIT_NON_QUALIFYING,
    "Risk_Equity": RiskClass.EQUITY,
    "Risk_Commodity": RiskClass.COMMODITY,
    "Risk_FX": RiskClass.FX,
}


@dataclass(frozen=True)
class SimmCoordinate:
    """
    Identity of one sensitivity in the SIMM framework.

    For an interest rate curve sensitivity the qualifier is the currency,
    ``label1`` the vertex (e.g. "5y") and ``label2`` the sub curve (e.g.
    "Libor6m").
    """

    qualifier: str
    bucket: str
    label1: str
    label2: str
    risk_type: str
    product_class: ProductClass = ProductClass.RATES_FX

    @property
    def risk_class(self) -> RiskClass:
        try:
            return RISK_TYPE_CLASSES[self.risk_type]
        except KeyError:
            raise ValueError(f"Unknown SIMM risk type: {self.risk_type}") from None

    def __str__(self) -> str:
        return "/".join(
            [self.product_class.value, self.risk_type, self.qualifier,
             self.bucket, self.label1, self.label2]
        )
