from core.data import parse_sheet_values


HEADER = ["이름", "디자인", "주문일자", "픽업일자", "맛선택", "시트", "사이즈", "크림", "요청사항", "특이사항", "주문경로"]


def make_row(
    name="Kim",
    design="Heart",
    order_date="2024.01.01",
    pickup_date="2024.01.05",
    flavor="Choco",
    base="Plain",
    size="1호",
    cream="Cream",
    request="",
    special="",
    source="Instagram",
):
    return [name, design, order_date, pickup_date, flavor, base, size, cream, request, special, source]


def make_orders(*rows):
    return parse_sheet_values([HEADER] + [list(r) for r in rows])
