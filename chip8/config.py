# ---- Configuration ----
# Tunables for the interpreter and its window. The command line may override
# cpu_hz; everything else is edited here.

scale = 10
width, height = 64, 32
window_width, window_height = width * scale, height * scale

# instructions per second, independent of the timer rate
cpu_hz = 500
timer_HZ = 60

# buzzer tone
beep_frequency = 440
beep_volume = 0.1

# False = log the bad opcode and carry on with the next instruction
halt_on_unknown_opcode = True
