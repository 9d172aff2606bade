class WeightConverter:
    """Utility for converting between kg and lbs."""

    KG_TO_LB = 2.20462
    UNITS = ("kg", "lbs")

    @staticmethod
    def kg_to_lb(kg: float) -> float:
        return round(kg * WeightConverter.KG_TO_LB, 2)

    @staticmethod
    def lb_to_kg(lb: float) -> float:
        return round(lb / WeightConverter.KG_TO_LB, 2)

    @classmethod
    def convert(cls, weight: float, from_unit: str, to_unit: str) -> float:
        """Return ``weight`` expressed in ``to_unit``."""
        if from_unit not in cls.UNITS or to_unit not in cls.UNITS:
            raise ValueError(f"unsupported unit: {from_unit} -> {to_unit}")
        if from_unit == to_unit:
            return round(weight, 2)
        if to_unit == "lbs":
            return cls.kg_to_lb(weight)
        return cls.lb_to_kg(weight)
