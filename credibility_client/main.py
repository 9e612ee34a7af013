"""Interactive console for the credibility client."""

import asyncio
import logging

from rich import print

from .domain.models.submission import Submission
from .infrastructure.dependencies import ServiceContainer

HELP = "Commands: [bold]history[/bold], [bold]facts[/bold], [bold]clear[/bold], [bold]quit[/bold]; anything else is evaluated."


async def main():
    """Run the credibility client console."""
    logging.basicConfig(
        level=logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    print("[bold]Credibility Client[/bold] - score information against the credibility backend")
    print("-----------------------------------------------------------------------------")
    print(HELP)

    container = ServiceContainer()
    await container.startup()
    service = container.get_evaluation_service()
    knowledge = container.get_knowledge_service()
    history = container.get_history_store()

    try:
        while True:
            text = input("\nEnter information to evaluate (or 'quit' to exit): ").strip()
            command = text.lower()
            if command in ('quit', 'exit', 'q'):
                break
            if not command:
                continue

            if command == "history":
                if not len(history):
                    print("No evaluations yet.")
                for entry in history.list():
                    outcome = (
                        f"{entry.result.score} ({entry.result.level.value})"
                        if entry.result
                        else "[red]failed[/red]"
                    )
                    print(f"{entry.timestamp}  {outcome}  {entry.input.content[:60]}")
                continue

            if command == "facts":
                facts = await knowledge.refresh()
                if facts is None:
                    print(f"[red]{knowledge.fetch_state.error}[/red]")
                    continue
                for fact in facts:
                    print(f"\n[bold]{fact.content}[/bold] - {fact.level} ({fact.score}%)")
                    for point in fact.reasoning:
                        print(f"  • {point.text}")
                continue

            if command == "clear":
                history.clear()
                print("History cleared.")
                continue

            print("\nEvaluating...")
            result = await service.submit(Submission.blank().model_copy(update={"content": text}))
            if result is None:
                state = service.evaluate_state
                print(f"\n[red]{state.error}[/red]")
                for field, message in state.field_errors.items():
                    print(f"  {field}: {message}")
                continue

            print("\nResults:")
            print(f"Score: {result.score} ({result.level.value})")
            print(f"Confidence: {result.confidence}%")
            print(
                f"Breakdown: source {result.breakdown.source_score}, "
                f"citations {result.breakdown.citation_score}, "
                f"language {result.breakdown.language_score}, "
                f"contradictions {result.breakdown.contradiction_score}"
            )
            print("\nReasoning:")
            for i, reason in enumerate(result.reasoning, 1):
                print(f"{i}. {reason}")

    finally:
        await container.shutdown()


def run():
    """Console script entry point."""
    asyncio.run(main())


if __name__ == "__main__":
    run()
