# =============================================================================
# main.py  —  Entry Point for the interactive Jenkins assistant
# =============================================================================
#
# HOW TO RUN:
#   python main.py            (or: jenkins-assistant)
#
# WHAT HAPPENS:
#   1. Loads .env (JENKINS_URL, JENKINS_USER, JENKINS_TOKEN, OPENROUTER_API_KEY)
#   2. Creates the Google ADK agent (agent/jenkins_agent.py), which spawns
#      the Jenkins MCP server as a subprocess
#   3. Reads questions from the terminal and streams the agent's events,
#      printing each tool call and the final answer
#
# The MCP server itself does not need this file.  Any MCP client can run
# "python -m tools.mcp_server" directly.
# =============================================================================

import asyncio

from dotenv import load_dotenv

# Must happen BEFORE creating the agent: LiteLlm reads OPENROUTER_API_KEY
# and the spawned server inherits JENKINS_* from this process.
load_dotenv()

from google.adk.runners import Runner  # noqa: E402
from google.adk.sessions import InMemorySessionService  # noqa: E402
from google.genai import types  # noqa: E402

from agent.jenkins_agent import create_agent  # noqa: E402

APP_NAME = "jenkins_assistant"
USER_ID = "cli_user"


async def run_agent():
    """Run the Jenkins assistant interactively until the user quits."""
    print("=" * 70)
    print("  JENKINS ASSISTANT")
    print("  Google ADK + LiteLlm + FastMCP")
    print("=" * 70)
    print("\n🔧 Initializing agent...")
    agent = create_agent()

    # InMemorySessionService keeps the conversation in RAM for this run only.
    session_service = InMemorySessionService()
    runner = Runner(
        agent=agent,
        app_name=APP_NAME,
        session_service=session_service,
    )
    session = await session_service.create_session(app_name=APP_NAME, user_id=USER_ID)

    print("✅ Agent ready!\n")
    print("💬 Ask about your Jenkins jobs and builds.")
    print("   (Type 'quit' to exit)\n")
    print("-" * 70)

    while True:
        try:
            user_input = input("\n🧑 You: ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\n\n👋 Goodbye!")
            break

        if user_input.lower() in ("quit", "exit", "q"):
            print("\n👋 Goodbye!")
            break

        if not user_input:
            continue

        user_message = types.Content(role="user", parts=[types.Part(text=user_input)])

        print("\n🤖 Agent is thinking...\n")
        print("-" * 70)

        final_response = ""
        async for event in runner.run_async(
            user_id=USER_ID,
            session_id=session.id,
            new_message=user_message,
        ):
            if event.content and event.content.parts:
                for part in event.content.parts:
                    if getattr(part, "text", None):
                        final_response = part.text
                    if getattr(part, "function_call", None):
                        print(f"  🔧 Calling tool: {part.function_call.name}")

        print("-" * 70)
        if final_response:
            print(f"\n🤖 Agent:\n\n{final_response}")
        else:
            print("\n⚠️  No response generated. The agent may have encountered an error.")

        print("\n" + "=" * 70)


def main():
    asyncio.run(run_agent())


if __name__ == "__main__":
    main()
