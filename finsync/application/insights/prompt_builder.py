"""Insight prompt rendering.

Renders an InsightContext into one structured prompt: an insight-report
prompt when the context has no query, a chat prompt otherwise. Rendering is
deterministic so that every candidate in the cascade sees the same text.
"""

from finsync.application.insights.formatting import format_money
from finsync.domain.value_objects import ChatRole, FinancialSummary, InsightContext

DEFAULT_MAX_TRANSACTIONS = 40


class InsightPromptBuilder:
    """Build model prompts from an insight context.

    Example:
        >>> builder = InsightPromptBuilder(currency_symbol="R$")
        >>> prompt = builder.build(context)
    """

    def __init__(
        self,
        *,
        currency_symbol: str = "R$",
        max_transactions: int = DEFAULT_MAX_TRANSACTIONS,
    ) -> None:
        self._symbol = currency_symbol
        self._max_transactions = max_transactions

    def _money(self, amount) -> str:
        return format_money(amount, self._symbol)

    def build(self, context: InsightContext) -> str:
        sections = [
            self._persona(context),
            self._summary_section(context),
            self._transactions_section(context),
            self._goals_section(context),
        ]
        if context.is_chat:
            if context.history:
                sections.append(self._history_section(context))
            sections.append(f"USER MESSAGE:\n{context.query.strip()}")
            sections.append(
                "Answer the message in the user's language, in at most three short "
                "paragraphs, using only the data above. Do not invent numbers."
            )
        else:
            sections.append(
                "Write exactly 3 short, practical financial insights for this user, "
                "numbered 1 to 3. Reference concrete amounts from the data above. "
                "Cover cash flow, the largest expenses and progress toward goals."
            )
        return "\n\n".join(sections)

    def _persona(self, context: InsightContext) -> str:
        profile = context.profile
        return (
            "You are a personal finance assistant for content creators and freelancers "
            "in Brazil. Be direct, friendly and specific.\n"
            f"USER: {profile.name} (plan: {profile.plan})"
        )

    def _summary_section(self, context: InsightContext) -> str:
        summary = FinancialSummary.from_transactions(context.transactions)
        return (
            "FINANCIAL SUMMARY:\n"
            f"- Income: {self._money(summary.total_income)}\n"
            f"- Expenses: {self._money(summary.total_expenses)}\n"
            f"- Balance: {self._money(summary.balance)}"
        )

    def _transactions_section(self, context: InsightContext) -> str:
        records = context.transactions[: self._max_transactions]
        if not records:
            return "RECENT TRANSACTIONS:\n- none recorded"
        lines = [
            f"- {r.transaction_date.isoformat()}: {r.description} "
            f"({r.transaction_type.value}) - {self._money(r.amount)} [{r.source}]"
            for r in records
        ]
        return "RECENT TRANSACTIONS:\n" + "\n".join(lines)

    def _goals_section(self, context: InsightContext) -> str:
        if not context.goals:
            return "GOALS:\n- none set"
        lines = []
        for goal in context.goals:
            deadline = f" (deadline {goal.deadline.isoformat()})" if goal.deadline else ""
            lines.append(
                f"- {goal.name}: {self._money(goal.current_amount)} / "
                f"{self._money(goal.target_amount)}{deadline}"
            )
        return "GOALS:\n" + "\n".join(lines)

    def _history_section(self, context: InsightContext) -> str:
        lines = [
            f"{'Assistant' if message.role == ChatRole.MODEL else 'User'}: {message.text}"
            for message in context.history
        ]
        return "CONVERSATION SO FAR:\n" + "\n".join(lines)
