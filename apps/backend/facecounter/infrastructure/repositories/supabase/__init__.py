"""supabase credential store backend."""
