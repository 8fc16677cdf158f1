"""A walkthrough of emitkit's EventEmitter."""

from emitkit import EventEmitter, OnEvent, bind_listeners

#* Basic usage
print("=== Basic EventEmitter Usage ===")

emitter = EventEmitter()

# Plain functions receive their context (the emitter by default) first
emitter.on("message", lambda this, msg: print("Received message:", msg))
emitter.on("data", lambda this, data: print("Received data:", data))

emitter.emit("message", "Hello, World!")
emitter.emit("data", {"id": 1, "name": "John"})

#* Once listener
print("\n=== Once Listener Example ===")

emitter.once("welcome", lambda this, name: print(f"Welcome {name}! This will only fire once."))

emitter.emit("welcome", "Alice")
emitter.emit("welcome", "Bob")  # This won't fire

#* Remove listeners
print("\n=== Remove Listener Example ===")


def goodbye_handler(this, name):
    print(f"Goodbye {name}!")


emitter.on("goodbye", goodbye_handler)
emitter.emit("goodbye", "Charlie")

emitter.remove_listener("goodbye", goodbye_handler)
emitter.emit("goodbye", "David")  # This won't fire

#* Event names and listener count
print("\n=== Event Information ===")

print("Event names:", emitter.event_names())
print('Listeners for "message":', emitter.listener_count("message"))
print('Listeners for "data":', emitter.listener_count("data"))

#* Custom context
print("\n=== Custom Context Example ===")


class Context:
    name = "CustomContext"


def show_context(self, data):
    print(f"Context: {self.name}, Data: {data}")


emitter.on("context", show_context, Context())
emitter.emit("context", "test data")

#* Decorated listeners
print("\n=== Decorator Example ===")


class Greeter:
    @OnEvent("greet")
    def hello(self, name):
        print(f"Hello {name}!")

    @OnEvent("greet", once=True)
    def first_time(self, name):
        print(f"Nice to meet you, {name}.")


bind_listeners(emitter, Greeter())
emitter.emit("greet", "Eve")
emitter.emit("greet", "Eve")

#* Remove all listeners
print("\n=== Remove All Listeners ===")

print("Before removal - Event names:", emitter.event_names())
emitter.remove_all_listeners()
print("After removal - Event names:", emitter.event_names())
