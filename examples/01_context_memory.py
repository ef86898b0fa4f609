"""Example 01: Semantic conversation memory.

This example demonstrates:
1. Setting up the context retriever with a local embedding model
2. Remembering conversation turns as they happen
3. Retrieving a token-bounded context block for a new question
4. Re-hydrating memory when switching conversations
"""

import asyncio
import logging

from recollect.config.schema import RecollectConfig
from recollect.exceptions import ProviderInitError
from recollect.memory.retriever import ContextRetriever


async def example_conversation_memory(retriever: ContextRetriever):
    """Remember turns and retrieve context for a follow-up question."""
    print("=" * 60)
    print("Example 1: Conversation Memory")
    print("=" * 60)

    turns = [
        ("1", "What is the capital of France?", "user"),
        ("2", "The capital of France is Paris.", "expert"),
        ("3", "Tell me about French culture", "user"),
        (
            "4",
            "French culture is known for its cuisine, art, fashion, and philosophy. "
            "Paris is the cultural center with world-class museums like the Louvre.",
            "expert",
        ),
        ("5", "What's a good recipe for banana bread?", "user"),
    ]

    print("\n1. Adding messages to memory...")
    for message_id, text, role in turns:
        await retriever.add_message(text, role, message_id)
        print(f"   [{role}] {text[:60]}")

    print(f"\n   Memory size: {retriever.get_memory_size()}")

    print("\n2. Retrieving context for: 'What do you know about Paris?'")
    context = await retriever.get_relevant_context("What do you know about Paris?")

    for msg in context.relevant_messages:
        print(f"   {msg.score:.3f} [{msg.role}] {msg.text[:60]}")
    print(f"   Estimated tokens: {context.total_tokens}")

    print("\n3. Prompt block sent to the model:\n")
    print(context.to_prompt())


async def example_switch_conversation(retriever: ContextRetriever):
    """Replace memory with another stored conversation."""
    print("\n" + "=" * 60)
    print("Example 2: Switching Conversations")
    print("=" * 60)

    stored_conversation = [
        {"id": "a", "text": "How do I use async/await in Python?", "role": "user"},
        {"id": "b", "text": "Use async def and await inside an event loop.", "role": "assistant"},
        {"id": "c", "text": "Best recipe for chocolate cake?", "role": "user"},
    ]

    count = await retriever.rehydrate_from_messages(stored_conversation)
    print(f"\n   Rehydrated {count} message(s)")

    context = await retriever.get_relevant_context("asynchronous programming in Python")
    for msg in context.relevant_messages:
        print(f"   {msg.score:.3f} [{msg.role}] {msg.text}")


async def main():
    logging.basicConfig(level=logging.INFO)

    retriever = ContextRetriever.from_config(RecollectConfig())

    try:
        await retriever.initialize()
    except ProviderInitError as e:
        print(f"Semantic memory unavailable: {e}")
        return

    await example_conversation_memory(retriever)
    await example_switch_conversation(retriever)


if __name__ == "__main__":
    asyncio.run(main())
