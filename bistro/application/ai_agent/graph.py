from langgraph.graph import StateGraph, END

from bistro.application.ai_agent.state import TurnState
from bistro.application.ai_agent.nodes.extraction import extraction_node
from bistro.application.ai_agent.nodes.intent import intent_node
from bistro.application.ai_agent.nodes.weather import weather_node, should_check_weather
from bistro.application.ai_agent.nodes.commit import commit_node
from bistro.domain.booking.value_objects import BookingIntent

def route_commit(state: TurnState):
    if state.get("intent") == BookingIntent.CONFIRMED:
        return "commit"
    return END

def route_weather(state: TurnState):
    if should_check_weather(state):
        return "weather_advisory"
    return route_commit(state)

def build_agent_graph():
    workflow = StateGraph(TurnState)
    
    # Add Nodes
    workflow.add_node("extract", extraction_node)
    workflow.add_node("evaluate_intent", intent_node)
    workflow.add_node("weather_advisory", weather_node)
    workflow.add_node("commit", commit_node)
    
    # Add Edges
    workflow.set_entry_point("extract")
    workflow.add_edge("extract", "evaluate_intent")
    
    workflow.add_conditional_edges(
        "evaluate_intent",
        route_weather,
        {
            "weather_advisory": "weather_advisory",
            "commit": "commit",
            END: END
        }
    )
    workflow.add_conditional_edges(
        "weather_advisory",
        route_commit,
        {
            "commit": "commit",
            END: END
        }
    )
    workflow.add_edge("commit", END)
    
    # No checkpointer: the client carries the whole conversation on every turn
    return workflow.compile()

agent_graph = build_agent_graph()
