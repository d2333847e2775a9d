"""Deterministic local insight engine.

Last resort of the insight cascade. It needs no network and no model, and
answers from the financial summary alone: three numbered insights in
report mode, a keyword-matched answer in chat mode. The same context
always produces the same text.
"""

import re
from decimal import ROUND_HALF_UP, Decimal

from finsync.application.insights.formatting import format_money, format_percent
from finsync.domain.value_objects import FinancialSummary, InsightContext

# Income sources typical of content creators
CREATOR_SOURCES = (
    "YouTube",
    "AdSense",
    "Hotmart",
    "Eduzz",
    "Kiwify",
    "TikTok",
    "Google Ads",
    "Patreon",
    "Twitch",
)

# Share of income suggested for taxes (creators) or savings (surplus)
RESERVE_RATE = Decimal("0.30")

# Suggested cut on the largest spending category
CATEGORY_CUT_RATE = Decimal("0.20")

# Progressive monthly income tax table: (upper bound, rate, deduction)
MONTHLY_TAX_BRACKETS: tuple[tuple[Decimal | None, Decimal, Decimal], ...] = (
    (Decimal("2259.20"), Decimal("0"), Decimal("0")),
    (Decimal("2826.65"), Decimal("0.075"), Decimal("169.44")),
    (Decimal("3751.05"), Decimal("0.15"), Decimal("381.44")),
    (Decimal("4664.68"), Decimal("0.225"), Decimal("662.77")),
    (None, Decimal("0.275"), Decimal("896.00")),
)

CENT = Decimal("0.01")

SAVINGS_PHRASES = ("spend less", "gastar menos", "cut costs", "cortar gastos")
TOPIC_KEYWORDS: tuple[tuple[str, frozenset[str]], ...] = (
    (
        "savings",
        frozenset({"save", "saving", "savings", "economizar", "poupar", "economia"}),
    ),
    (
        "tax",
        frozenset({"tax", "taxes", "irpf", "imposto", "impostos", "leão", "leao"}),
    ),
    (
        "expenses",
        frozenset(
            {
                "spent",
                "spend",
                "spending",
                "expense",
                "expenses",
                "gastei",
                "gasto",
                "gastos",
                "despesa",
                "despesas",
            }
        ),
    ),
    (
        "income",
        frozenset({"earned", "earn", "income", "revenue", "ganhei", "renda", "receita"}),
    ),
    (
        "summary",
        frozenset({"summary", "report", "overview", "resumo", "relatório", "relatorio"}),
    ),
    ("balance", frozenset({"balance", "saldo", "left", "sobrou"})),
    ("greeting", frozenset({"hello", "hi", "hey", "olá", "ola", "oi"})),
)


def estimate_monthly_income_tax(monthly_income: Decimal) -> Decimal:
    """Estimate monthly income tax with the progressive table (never negative)."""
    for upper_bound, rate, deduction in MONTHLY_TAX_BRACKETS:
        if upper_bound is None or monthly_income <= upper_bound:
            tax = monthly_income * rate - deduction
            return max(tax, Decimal("0")).quantize(CENT, rounding=ROUND_HALF_UP)
    raise AssertionError("unreachable: last bracket is unbounded")


def detect_topic(query: str) -> str | None:
    """Return the first chat topic the query mentions, or None."""
    text = query.lower()
    if any(phrase in text for phrase in SAVINGS_PHRASES):
        return "savings"
    words = set(re.findall(r"\w+", text))
    for topic, keywords in TOPIC_KEYWORDS:
        if words & keywords:
            return topic
    return None


class LocalInsightEngine:
    """Rule-based answers computed from the context's transactions and goals.

    Example:
        >>> engine = LocalInsightEngine(currency_symbol="R$")
        >>> engine.respond(context)
        'Hi Ana, here is your financial snapshot ...'
    """

    def __init__(self, *, currency_symbol: str = "R$") -> None:
        self._symbol = currency_symbol

    def _money(self, amount: Decimal) -> str:
        return format_money(amount, self._symbol)

    def respond(self, context: InsightContext) -> str:
        summary = FinancialSummary.from_transactions(context.transactions)
        if context.is_chat:
            return self._chat(context, summary)
        return self._report(context, summary)

    # Report mode

    def _report(self, context: InsightContext, summary: FinancialSummary) -> str:
        header = (
            f"Hi {context.profile.name}, here is your financial snapshot "
            f"({summary.transaction_count} transactions):"
        )
        insights = [
            self._cash_flow_insight(summary),
            self._largest_expense_insight(summary),
            self._goal_insight(context),
        ]
        numbered = [f"{index}. {text}" for index, text in enumerate(insights, start=1)]
        return "\n".join([header, *numbered])

    def _cash_flow_insight(self, summary: FinancialSummary) -> str:
        if summary.transaction_count == 0:
            return (
                "No transactions yet. Connect Hotmart or your bank through Open Finance "
                "so your cash flow can be analysed."
            )
        creator_income = summary.income_from(CREATOR_SOURCES)
        if creator_income > 0:
            reserve = creator_income * RESERVE_RATE
            return (
                f"Creator income: {self._money(creator_income)} of your "
                f"{self._money(summary.total_income)} income came from creator platforms. "
                f"Set aside 30% ({self._money(reserve)}) for taxes and slower months."
            )
        if summary.has_deficit:
            return (
                f"Spending alert: expenses ({self._money(summary.total_expenses)}) exceed "
                f"income ({self._money(summary.total_income)}) by "
                f"{self._money(-summary.balance)}. Review non-essential costs this month."
            )
        return (
            f"Positive balance of {self._money(summary.balance)}. Moving 30% of it "
            f"({self._money(summary.balance * RESERVE_RATE)}) into savings keeps the "
            "surplus working for you."
        )

    def _largest_expense_insight(self, summary: FinancialSummary) -> str:
        largest = summary.largest_expense
        if largest is None:
            return "No expenses recorded in this period. Keep logging purchases to see where money goes."
        return (
            f"Largest expense: {largest.description} at {self._money(largest.amount)}, "
            f"{format_percent(summary.largest_expense_share)} of your spending."
        )

    def _goal_insight(self, context: InsightContext) -> str:
        active = [goal for goal in context.goals if goal.is_active]
        if active:
            goal = active[0]
            deadline = f" by {goal.deadline.isoformat()}" if goal.deadline else ""
            return (
                f'Goal "{goal.name}": {format_percent(goal.progress_percent)} reached, '
                f"{self._money(goal.remaining_amount)} to go{deadline}."
            )
        if context.goals:
            return "Every goal you set is reached. Set a new one to keep the momentum."
        return (
            "No savings goal yet. An emergency fund of three to six months of "
            "expenses is a good first target."
        )

    # Chat mode

    def _chat(self, context: InsightContext, summary: FinancialSummary) -> str:
        topic = detect_topic(context.query or "")
        match topic:
            case "savings":
                return self._savings_answer(summary)
            case "tax":
                return self._tax_answer(summary)
            case "expenses":
                return self._expenses_answer(summary)
            case "income":
                return self._income_answer(summary)
            case "summary":
                return self._summary_answer(context, summary)
            case "balance":
                return self._balance_answer(summary)
            case "greeting":
                return (
                    f"Hi {context.profile.name}! I can answer questions about your "
                    "expenses, income, balance, taxes and savings, or give you a summary."
                )
            case _:
                return (
                    "I could not match that question. Try asking about your expenses, "
                    "income, balance, taxes, savings tips or a financial summary."
                )

    def _top(self, totals: dict[str, Decimal], limit: int = 3) -> list[tuple[str, Decimal]]:
        return sorted(totals.items(), key=lambda item: (-item[1], item[0]))[:limit]

    def _expenses_answer(self, summary: FinancialSummary) -> str:
        if summary.largest_expense is None:
            return "You have no expenses recorded in this period."
        top = ", ".join(
            f"{label} ({self._money(amount)})"
            for label, amount in self._top(summary.expenses_by_category)
        )
        return (
            f"You spent {self._money(summary.total_expenses)} in this period. "
            f"Top categories: {top}. Biggest single expense: "
            f"{summary.largest_expense.description} ({self._money(summary.largest_expense.amount)})."
        )

    def _income_answer(self, summary: FinancialSummary) -> str:
        if summary.total_income <= 0:
            return "You have no income recorded in this period."
        sources = ", ".join(
            f"{label} ({self._money(amount)})"
            for label, amount in self._top(summary.income_by_source)
        )
        return (
            f"You received {self._money(summary.total_income)} in this period. "
            f"Main sources: {sources}."
        )

    def _balance_answer(self, summary: FinancialSummary) -> str:
        state = "a deficit" if summary.has_deficit else "a surplus"
        return (
            f"Your balance for this period is {self._money(summary.balance)}, {state} "
            f"(income {self._money(summary.total_income)}, expenses "
            f"{self._money(summary.total_expenses)})."
        )

    def _tax_answer(self, summary: FinancialSummary) -> str:
        tax = estimate_monthly_income_tax(summary.total_income)
        if tax == 0:
            return (
                f"With {self._money(summary.total_income)} of income, you fall in the "
                "exempt bracket of the monthly income tax table. Keep records of every "
                "receipt in case that changes."
            )
        rate = (tax / summary.total_income * 100).quantize(Decimal("0.1"))
        return (
            f"With {self._money(summary.total_income)} of income, the estimated monthly "
            f"income tax is {self._money(tax)} (effective rate {format_percent(rate)}). "
            "This is an estimate; confirm it with an accountant."
        )

    def _savings_answer(self, summary: FinancialSummary) -> str:
        if not summary.expenses_by_category:
            return (
                "No expenses recorded yet, so there is nothing to cut. Try saving 30% "
                "of each payment as soon as it arrives."
            )
        label, amount = self._top(summary.expenses_by_category, limit=1)[0]
        cut = amount * CATEGORY_CUT_RATE
        return (
            f"Your largest spending category is {label} ({self._money(amount)}). "
            f"Cutting it by 20% would save {self._money(cut)} per period. "
            "Automate a transfer to savings on the day income arrives."
        )

    def _summary_answer(self, context: InsightContext, summary: FinancialSummary) -> str:
        active_goals = sum(1 for goal in context.goals if goal.is_active)
        return (
            f"Summary: {summary.transaction_count} transactions, income "
            f"{self._money(summary.total_income)}, expenses "
            f"{self._money(summary.total_expenses)}, balance {self._money(summary.balance)}. "
            f"Active goals: {active_goals}."
        )
